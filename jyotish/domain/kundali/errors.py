from jyotish.domain.kundali.constants import CelestialBody


class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidBirthDataError(KundaliError):
    """
    Raised when birth inputs are invalid or inconsistent.
    """
    pass


class UnsupportedAyanamsaError(KundaliError):
    """
    Raised when an unsupported ayanamsa is requested.
    """
    pass


class CalculationError(KundaliError):
    """
    Raised when astronomical calculation fails.
    """
    pass


class OracleFailure(CalculationError):
    """
    Raised when the ephemeris oracle reports a failure.

    The status code and message are carried verbatim from the
    oracle. Failures are never retried.
    """

    def __init__(self, code: int, message: str):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message


class DerivationFailure(OracleFailure):
    """
    Raised when a derived body (Ketu) cannot be resolved because
    the oracle call for its source body failed.
    """

    def __init__(self, code: int, message: str, source: CelestialBody):
        super().__init__(code, message)
        self.source = source


class MissingPlacement(KundaliError):
    """
    Raised when a calculation needs a body that is absent from the chart.
    """

    def __init__(self, body: CelestialBody):
        super().__init__(f"Placement for {body.value} is missing from the chart")
        self.body = body
