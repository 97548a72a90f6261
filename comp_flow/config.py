"""Solver settings and their YAML loading with profile inheritance.

A settings file is either a single ``solver:`` mapping::

    solver:
      tol: 1.0e-12
      max_iterations: 200

or a set of named ``profiles:``, where a ``base:`` key inherits from another
profile by deep merge::

    profiles:
      default:
        max_iterations: 100
      patient:
        base: default
        max_iterations: 1000
        oblique_max_retries: 40
"""

import copy
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from comp_flow.solvers import default_tolerance


@dataclass(frozen=True)
class SolverSettings:
    """Per-call constants of the iterative inversions.

    Attributes
    ----------
    tol : float or None
        Step tolerance. None uses √ε of the working precision.
    max_iterations : int
        Cap for the bracketed inversions (Newton, and Brent for the
        Prandtl-Meyer angle).
    secant_max_iterations : int
        Cap for each secant solve of the oblique wave angle (scipy's default).
    bisection_iterations : int
        Fixed iteration count of the bisection area-ratio inversion.
    oblique_step : float
        Decrement [radians] of the wave-angle seed between retries.
    oblique_max_retries : int
        Number of re-seeded solves before the wave angle is reported as NaN.
    """
    tol: Optional[float] = None
    max_iterations: int = 100
    secant_max_iterations: int = 50
    bisection_iterations: int = 10000
    oblique_step: float = 0.1
    oblique_max_retries: int = 20

    def tolerance(self, dtype):
        """Step tolerance for a computation carried out in ``dtype``."""
        if self.tol is not None:
            return self.tol
        return default_tolerance(dtype)


DEFAULT_SETTINGS = SolverSettings()


def _deep_merge(base, overrides):
    """Recursively merge overrides into base dict.

    - Scalars in overrides replace base values
    - Dicts are merged recursively
    - None values in overrides remove the key
    """
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _resolve_profile(name, all_raw, resolving=()):
    """Resolve a single profile, following base references."""
    if name in resolving:
        chain = ' -> '.join(resolving + (name,))
        raise ValueError(f"Circular base reference: {chain}")
    raw = all_raw[name] or {}
    if 'base' not in raw:
        return copy.deepcopy(raw)
    base_name = raw['base']
    if base_name not in all_raw:
        raise ValueError(f"Profile '{name}' references unknown base '{base_name}'")
    base_resolved = _resolve_profile(base_name, all_raw, resolving + (name,))
    overrides = {k: v for k, v in raw.items() if k != 'base'}
    return _deep_merge(base_resolved, overrides)


def build_settings(cfg, defaults=DEFAULT_SETTINGS):
    """Convert a resolved settings dict into a `SolverSettings`.

    Keys not present in ``cfg`` keep their value from ``defaults``.
    """
    known = {f.name for f in fields(SolverSettings)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown solver setting(s): {', '.join(unknown)}")

    values = {}
    for key, value in cfg.items():
        if key == 'tol':
            values[key] = None if value is None else float(value)
        elif key == 'oblique_step':
            values[key] = float(value)
        else:
            values[key] = int(value)
    return replace(defaults, **values)


def load_settings(path, profile=None):
    """Load solver settings from YAML.

    Parameters
    ----------
    path : str or Path
        Path to YAML settings file.
    profile : str or None
        Profile to select from a ``profiles:`` file (default: ``default``).
        Ignored for a single ``solver:`` file.

    Returns
    -------
    SolverSettings
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raise ValueError(f"Empty settings file: {path}")

    if 'profiles' in raw:
        profiles = raw['profiles']
        name = profile or 'default'
        if name not in profiles:
            raise ValueError(f"Unknown profile '{name}' in {path}")
        cfg = _resolve_profile(name, profiles)
    elif 'solver' in raw:
        cfg = raw['solver'] or {}
    else:
        # Treat entire file as a single settings mapping
        cfg = raw

    return build_settings(cfg)
