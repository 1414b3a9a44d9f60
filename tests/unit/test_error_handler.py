"""Unit tests for the exception hierarchy helpers."""

from plus_shipping.utils.error_handler import (
    AppException,
    ClusterOperationException,
    ErrorCode,
    ErrorSeverity,
    NotFoundException,
    describe_exception,
)


class TestExceptions:
    """Tests for exception metadata."""

    def test_not_found_codes(self):
        assert NotFoundException("x", resource="shop", key="x").error_code == ErrorCode.SHOP_NOT_FOUND
        assert NotFoundException("x", resource="environment", key="x").error_code == ErrorCode.ENVIRONMENT_NOT_FOUND
        assert NotFoundException("x", resource="location", key="x").error_code == ErrorCode.LOCATION_NOT_FOUND

    def test_cluster_exception_to_dict(self):
        error = ClusterOperationException(
            "switch_context failed (exit code 1)",
            operation="switch_context",
            error_code=ErrorCode.CONTEXT_SWITCH_FAILED,
            command=["kubectl", "config", "use-context", "tes"],
            return_code=1,
            stderr="no such context",
        )

        data = error.to_dict()

        assert data["error_type"] == "ClusterOperationException"
        assert data["error_code"] == "CONTEXT_SWITCH_FAILED"
        assert data["severity"] == ErrorSeverity.HIGH.value
        assert data["is_retryable"] is True
        assert data["details"]["command"] == "kubectl config use-context tes"


class TestDescribeException:
    """Tests for describe_exception."""

    def test_appends_stderr(self):
        error = ClusterOperationException("exec_sql failed (exit code 1)", operation="exec_sql", stderr="ERROR 1146\n")
        assert describe_exception(error) == "exec_sql failed (exit code 1): ERROR 1146"

    def test_does_not_repeat_stderr(self):
        error = ClusterOperationException("ERROR 1146", operation="exec_sql", stderr="ERROR 1146")
        assert describe_exception(error) == "ERROR 1146"

    def test_plain_message(self):
        assert describe_exception(AppException("boom")) == "boom"

    def test_empty_message(self):
        assert describe_exception(RuntimeError()) == "Unknown error occurred"
