"""Tests for termination strategies."""

import pytest

from valqueue import (
    AlwaysStop,
    FailurePayload,
    InfoPayload,
    NeverStop,
    PayloadGroup,
    StopAfterCustom,
    StopAfterFailure,
    StopAfterSeverity,
    StopIfContainsFailure,
    SuccessPayload,
    WarningPayload,
)

ALL_PAYLOADS = [
    None,
    SuccessPayload(),
    InfoPayload(),
    WarningPayload(),
    FailurePayload(),
    PayloadGroup((FailurePayload(),)),
]


class TestNeverAndAlwaysStop:
    @pytest.mark.parametrize("payload", ALL_PAYLOADS)
    def test_never_stop(self, payload) -> None:
        assert NeverStop().should_stop(payload) is False

    @pytest.mark.parametrize("payload", ALL_PAYLOADS)
    def test_always_stop(self, payload) -> None:
        assert AlwaysStop().should_stop(payload) is True


class TestStopAfterFailure:
    def test_stops_on_failure(self) -> None:
        assert StopAfterFailure().should_stop(FailurePayload("bad")) is True

    @pytest.mark.parametrize("payload", [None, SuccessPayload(), InfoPayload(), WarningPayload()])
    def test_continues_otherwise(self, payload) -> None:
        assert StopAfterFailure().should_stop(payload) is False

    def test_ignores_failure_inside_group(self) -> None:
        group = PayloadGroup((WarningPayload(), FailurePayload()))
        assert StopAfterFailure().should_stop(group) is False


class TestStopIfContainsFailure:
    def test_stops_on_top_level_failure(self) -> None:
        assert StopIfContainsFailure().should_stop(FailurePayload()) is True

    def test_stops_on_nested_failure(self) -> None:
        nested = PayloadGroup(
            (
                InfoPayload(),
                PayloadGroup((SuccessPayload(), PayloadGroup((WarningPayload(), FailurePayload("deep"))))),
            ),
        )
        assert StopIfContainsFailure().should_stop(nested) is True

    def test_continues_without_failure(self) -> None:
        group = PayloadGroup((WarningPayload(), PayloadGroup((InfoPayload(),))))
        assert StopIfContainsFailure().should_stop(group) is False
        assert StopIfContainsFailure().should_stop(None) is False


class TestStopAfterSeverity:
    def test_defaults_never_stop(self) -> None:
        strategy = StopAfterSeverity()
        assert not any(strategy.should_stop(p) for p in ALL_PAYLOADS)

    def test_selected_severities(self) -> None:
        strategy = StopAfterSeverity(failure=True, warning=True)
        assert strategy.should_stop(FailurePayload()) is True
        assert strategy.should_stop(WarningPayload()) is True
        assert strategy.should_stop(InfoPayload()) is False
        assert strategy.should_stop(SuccessPayload()) is False

    def test_each_flag_is_independent(self) -> None:
        assert StopAfterSeverity(info=True).should_stop(InfoPayload()) is True
        assert StopAfterSeverity(success=True).should_stop(SuccessPayload()) is True
        assert StopAfterSeverity(success=True).should_stop(FailurePayload()) is False

    def test_groups_and_none_do_not_stop(self) -> None:
        strategy = StopAfterSeverity(failure=True, warning=True, info=True, success=True)
        assert strategy.should_stop(None) is False
        assert strategy.should_stop(PayloadGroup((FailurePayload(),))) is False


class TestStopAfterCustom:
    def test_delegates_to_predicate(self) -> None:
        strategy = StopAfterCustom(lambda payload: isinstance(payload, (FailurePayload, WarningPayload)))
        assert strategy.should_stop(WarningPayload()) is True
        assert strategy.should_stop(InfoPayload()) is False

    def test_predicate_errors_propagate(self) -> None:
        def boom(payload: object) -> bool:
            raise ValueError(payload)

        with pytest.raises(ValueError):  # noqa: PT011
            StopAfterCustom(boom).should_stop(None)
