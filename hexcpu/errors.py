"""Fatal CPU conditions. Each one halts the execution engine."""


class CPUError(RuntimeError):
    pass


class UnknownInstructionError(CPUError):
    def __init__(self, code: str):
        super().__init__(f"Unknown instruction: {code}")
        self.code = code


class InvalidJumpError(CPUError):
    def __init__(self, address: int):
        super().__init__(
            f"Invalid jump address: {address} (0x{address:03X}) is not divisible by 2")
        self.address = address


class OperandRangeError(CPUError):
    """An operand value lies outside what the instruction accepts."""

    def __init__(self, operand: str, value: int, limit: int):
        if value > limit:
            msg = f"{operand} value {value} exceeds {limit}"
        else:
            msg = f"{operand} value {value} is below 0"
        super().__init__(msg)
        self.operand = operand
        self.value = value
        self.limit = limit
