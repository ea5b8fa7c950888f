# protoready/core/exceptions.py
"""
Service-boundary errors.

The assessment engine itself never raises for bad input; these are raised by
the hosting layer when it refuses or abandons an assessment.
"""


class AssessmentError(Exception):
    """Base class for assessment service errors"""


class InputTooLargeError(AssessmentError):
    """Code output exceeds the configured size cap"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Code output is {size} characters; limit is {limit}")


class AssessmentTimeoutError(AssessmentError):
    """Assessment did not finish within the configured deadline"""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Assessment exceeded {timeout:g}s deadline")
