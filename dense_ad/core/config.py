# dense_ad/core/config.py
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, replace


@dataclass
class ADConfig:
    """
    Global switches for the forward-mode engine.

    Attributes
    ----------
    check_shapes : bool
        Verify that two tangent containers have the same length before they
        are zipped together. Off by default: mixing tangents that come from
        different `vars` calls is a caller error and is not detected unless
        this flag is set, in which case it raises ValueError.
    coerce_inputs : bool
        Convert primal inputs handed to `vars` to numpy.float64. Turn off to
        differentiate over exact types such as fractions.Fraction.
    """
    check_shapes: bool = False
    coerce_inputs: bool = True


# Global singleton config (read through the module so use_config() is honoured)
global_config = ADConfig()


@contextmanager
def use_config(config: ADConfig | None = None, **overrides):
    """
    Context manager to temporarily switch the active configuration:
        with use_config(check_shapes=True):
            ... differentiate ...
    """
    from . import config as _config_mod  # local import so reassignment is visible
    prev = _config_mod.global_config
    try:
        _config_mod.global_config = replace(config or prev, **overrides)
        yield _config_mod.global_config
    finally:
        _config_mod.global_config = prev
