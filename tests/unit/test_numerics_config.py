"""Тесты для NumericsConfig."""

import pytest
from pydantic import ValidationError

from physcalc.core.config import (
    DEFAULT_NUMERICS,
    MEMO_BUFSIZE,
    MEMO_STEPSIZE,
    ROMBERG_MAX_STEPS,
    TIMESTEP,
    IntegrationMethod,
    NumericsConfig,
)


class TestNumericsConfig:
    """Тесты параметров численных методов."""

    def test_defaults(self):
        assert DEFAULT_NUMERICS.timestep == TIMESTEP == 0.001
        assert DEFAULT_NUMERICS.memo_stepsize == MEMO_STEPSIZE == 1 / 1024
        assert DEFAULT_NUMERICS.memo_bufsize == MEMO_BUFSIZE == 1024
        assert DEFAULT_NUMERICS.romberg_max_steps == ROMBERG_MAX_STEPS
        assert DEFAULT_NUMERICS.integration_method is IntegrationMethod.TRAPEZOID

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_NUMERICS.timestep = 0.1

    @pytest.mark.parametrize(
        "field, value",
        [
            ("timestep", 0.0),
            ("timestep", -0.001),
            ("memo_stepsize", 0.0),
            ("memo_bufsize", 0),
            ("romberg_max_steps", 0),
            ("romberg_max_steps", 31),
            ("romberg_accuracy", 0.0),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            NumericsConfig(**{field: value})

    def test_method_from_string(self):
        config = NumericsConfig(integration_method="romberg")
        assert config.integration_method is IntegrationMethod.ROMBERG
