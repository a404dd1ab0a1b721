"""Tests for the exception hierarchy."""

import pytest

from sigmon.exceptions import (
    ConfigError,
    InvalidLogLevelError,
    SigmonError,
    SubscriptionError,
)


@pytest.mark.unit
class TestSigmonError:
    """Test the base exception."""

    def test_message_only(self):
        error = SigmonError("something failed")
        assert str(error) == "something failed"
        assert error.message == "something failed"
        assert error.context == {}

    def test_context_rendered(self):
        error = SigmonError("cannot install signal handler", signum=10, reason="x")
        assert str(error) == "cannot install signal handler (signum=10, reason=x)"
        assert error.context == {"signum": 10, "reason": "x"}


@pytest.mark.unit
class TestHierarchy:
    """Test subclass relationships."""

    @pytest.mark.parametrize(
        "cls", [SubscriptionError, ConfigError, InvalidLogLevelError]
    )
    def test_all_derive_from_base(self, cls):
        assert issubclass(cls, SigmonError)

    def test_invalid_log_level_is_config_error(self):
        error = InvalidLogLevelError("loud")
        assert isinstance(error, ConfigError)
        assert error.level == "loud"
        assert str(error) == "Invalid log level: loud"

    def test_catchable_as_base(self):
        with pytest.raises(SigmonError):
            raise SubscriptionError("cannot install signal handler", signum=1)
