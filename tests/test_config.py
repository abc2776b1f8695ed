import numpy as np

from dense_ad import ADConfig, use_config, vars
from dense_ad.core import config


def test_defaults():
    cfg = ADConfig()
    assert cfg.check_shapes is False
    assert cfg.coerce_inputs is True


def test_use_config_applies_overrides_and_restores():
    before = config.global_config
    with use_config(check_shapes=True) as active:
        assert config.global_config is active
        assert active.check_shapes is True
        assert active.coerce_inputs == before.coerce_inputs
    assert config.global_config is before


def test_use_config_restores_after_error():
    before = config.global_config
    try:
        with use_config(ADConfig(coerce_inputs=False)):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert config.global_config is before


def test_coerce_inputs_controls_primal_type():
    x = vars([1])[0]
    assert isinstance(x.value, np.float64)
    with use_config(coerce_inputs=False):
        y = vars([1])[0]
    assert type(y.value) is int
    assert y.tangent.dtype == object
