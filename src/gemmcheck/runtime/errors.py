class HarnessError(RuntimeError):
    """Fatal error while running a verification case (not a numeric mismatch)."""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self):
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class TransferError(HarnessError):
    pass


class DeviceExecutionError(HarnessError):
    pass


class DriverUnavailableError(HarnessError):
    pass


class InvalidArgumentError(ValueError):
    pass


class GemmMismatchError(AssertionError):
    def __init__(self, arguments, dtype, result):
        self.arguments = arguments
        self.dtype = dtype
        self.result = result
        super().__init__(self.format_message())

    def format_message(self):
        worst = ", ".join(
            f"[{index}] device={actual!r} reference={expected!r}" for index, actual, expected in self.result.worst
        )
        return (
            f"GEMM result mismatch for {self.arguments} ({self.dtype}): "
            f"{self.result.mismatches} of {self.result.size} elements outside tolerance "
            f"(max abs error {self.result.max_abs_error:.3e}, rtol={self.result.rtol:.1e}, atol={self.result.atol:.1e})"
            f"\nWorst elements: {worst}"
        )
