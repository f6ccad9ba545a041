import pytest

from hostfetch.probes import (
    DetectionFailedError,
    ErrorKind,
    OutcomeStatus,
    ParseFailureError,
    ProbeError,
    ProbeOutcome,
    UnsupportedPlatformError,
)


def test_constructors_populate_exactly_one_arm():
    detected = ProbeOutcome.detected("value")
    unavailable = ProbeOutcome.unavailable()
    failed = ProbeOutcome.failed(ErrorKind.IO_FAILURE, "disk gone")

    assert (detected.is_detected, detected.is_unavailable, detected.is_error) == (True, False, False)
    assert (unavailable.is_detected, unavailable.is_unavailable, unavailable.is_error) == (False, True, False)
    assert (failed.is_detected, failed.is_unavailable, failed.is_error) == (False, False, True)
    assert unavailable.value is None and unavailable.error is None
    assert failed.value is None and failed.error == ProbeError(ErrorKind.IO_FAILURE, "disk gone")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": OutcomeStatus.DETECTED},
        {"status": OutcomeStatus.DETECTED, "value": 1, "error": ProbeError(ErrorKind.IO_FAILURE)},
        {"status": OutcomeStatus.UNAVAILABLE, "value": 1},
        {"status": OutcomeStatus.UNAVAILABLE, "error": ProbeError(ErrorKind.IO_FAILURE)},
        {"status": OutcomeStatus.ERROR},
        {"status": OutcomeStatus.ERROR, "value": 1, "error": ProbeError(ErrorKind.IO_FAILURE)},
    ],
)
def test_mixed_arms_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ProbeOutcome(**kwargs)


def test_map_and_then_pass_non_detected_arms_through():
    failed = ProbeOutcome.failed(ErrorKind.PARSE_FAILURE, "bad")

    assert ProbeOutcome.detected(2).map(lambda value: value * 10) == ProbeOutcome.detected(20)
    assert ProbeOutcome.unavailable().map(lambda value: value * 10).is_unavailable
    assert failed.map(lambda value: value * 10) == failed
    assert ProbeOutcome.detected(2).and_then(lambda _: ProbeOutcome.unavailable()).is_unavailable
    assert failed.and_then(lambda value: ProbeOutcome.detected(value)) == failed


def test_map_to_none_becomes_unavailable():
    assert ProbeOutcome.detected(1).map(lambda value: None) == ProbeOutcome.unavailable()
    assert ProbeOutcome.detected({}).map(lambda value: value.get("missing")).is_unavailable


def test_value_or():
    assert ProbeOutcome.detected("x").value_or("default") == "x"
    assert ProbeOutcome.unavailable().value_or("default") == "default"
    assert ProbeOutcome.failed(ErrorKind.DETECTION_FAILED).value_or("default") == "default"


def test_error_messages_render_by_kind():
    assert str(ProbeError(ErrorKind.UNSUPPORTED_PLATFORM, "haiku")) == "Platform not supported"
    assert str(ProbeError(ErrorKind.DETECTION_FAILED, "nope")) == "Detection failed: nope"
    assert str(ProbeError(ErrorKind.IO_FAILURE, "denied")) == "I/O error: denied"
    assert str(ProbeError(ErrorKind.PARSE_FAILURE, "junk")) == "Parse error: junk"


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (FileNotFoundError("missing"), ErrorKind.IO_FAILURE),
        (PermissionError("denied"), ErrorKind.IO_FAILURE),
        (ParseFailureError("junk"), ErrorKind.PARSE_FAILURE),
        (UnsupportedPlatformError("haiku"), ErrorKind.UNSUPPORTED_PLATFORM),
        (DetectionFailedError("nope"), ErrorKind.DETECTION_FAILED),
        (RuntimeError("boom"), ErrorKind.DETECTION_FAILED),
    ],
)
def test_from_exception_maps_fault_kinds(exc, kind):
    outcome = ProbeOutcome.from_exception(exc)
    assert outcome.is_error
    assert outcome.error.kind is kind


def test_to_dict_shapes():
    assert ProbeOutcome.unavailable().to_dict() == {"status": "unavailable"}
    assert ProbeOutcome.detected(3).to_dict() == {"status": "detected", "value": 3}
    assert ProbeOutcome.failed(ErrorKind.IO_FAILURE, "x").to_dict() == {
        "status": "error",
        "error": {"kind": "io_failure", "message": "x"},
    }
