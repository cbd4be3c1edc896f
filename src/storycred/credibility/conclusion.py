# src/storycred/credibility/conclusion.py

from typing import Dict, Union

from storycred.errors import InvalidInputError
from storycred.normalize.schema import VerificationStatus

FALSE_CONCLUSION = (
    "This story has been identified as false based on multiple factors including "
    "lack of credible sources and contradiction with established facts."
)
VERIFIED_CONCLUSION = (
    "This story has been verified as true with strong evidence and expert consensus."
)
UNDER_INVESTIGATION_CONCLUSION = (
    "This story is currently under investigation. While some evidence suggests "
    "credibility, further verification is needed."
)

# Debunked shares the under-investigation wording with unverified/investigating.
CONCLUSIONS: Dict[VerificationStatus, str] = {
    VerificationStatus.FAKE: FALSE_CONCLUSION,
    VerificationStatus.REAL: VERIFIED_CONCLUSION,
    VerificationStatus.UNVERIFIED: UNDER_INVESTIGATION_CONCLUSION,
    VerificationStatus.INVESTIGATING: UNDER_INVESTIGATION_CONCLUSION,
    VerificationStatus.DEBUNKED: UNDER_INVESTIGATION_CONCLUSION,
}

_unmapped = set(VerificationStatus) - set(CONCLUSIONS)
if _unmapped:
    raise RuntimeError(
        f"No conclusion defined for statuses: {sorted(s.value for s in _unmapped)}"
    )


def synthesize_conclusion(status: Union[VerificationStatus, str]) -> str:
    """
    Map a verification status to its human-readable conclusion.

    Args:
        status: VerificationStatus member or its string value

    Returns:
        Conclusion sentence.

    Raises:
        InvalidInputError: If status is not a known verification status.
    """
    try:
        status = VerificationStatus(status)
    except ValueError as e:
        raise InvalidInputError(f"Unknown verification status: {status!r}") from e
    return CONCLUSIONS[status]
