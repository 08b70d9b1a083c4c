"""
Intent parser for free-text plan modification requests.

Requests are in Spanish ("reducir la carga", "más volumen"...). Text is
lower-cased and run through an ordered list of rules; the first rule whose
predicate matches builds the request. Keyword tables live at module level
so rules can be tested and extended on their own.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Sequence, Tuple
import logging
import re

from .base import BaseService
from ..config import Settings
from ..models.plans import ModificationRequest, ModificationType


# =============================================================================
# Keyword tables
# =============================================================================

EXERCISE_CHANGE_KEYWORDS: Tuple[str, ...] = ("cambiar", "ejercicio")
LOAD_NOUNS: Tuple[str, ...] = ("carga", "peso")
LOAD_REDUCTION_VERB = "reducir"
LOAD_INCREASE_VERB = "aumentar"
INTENSITY_NOUN = "intensidad"
VOLUME_NOUN = "volumen"

INCREASE_WORDS: Tuple[str, ...] = ("aumentar", "más", "subir")
DECREASE_WORDS: Tuple[str, ...] = ("reducir", "bajar", "menos")
# Second pass also accepts the unaccented "mas"
LOOSE_INCREASE_WORDS: Tuple[str, ...] = ("más", "mas", "aumentar", "subir")
LOOSE_DECREASE_WORDS: Tuple[str, ...] = ("menos", "reducir", "bajar")

UNIT_SUFFIX = r"(?:%|kg|kilos|libras)?"

# Number must directly follow the verb: "reducir 15", "subir 10%"
INCREASE_CAPTURE = re.compile(rf"(?:aumentar|subir|mas|más)\s+(\d+){UNIT_SUFFIX}")
DECREASE_CAPTURE = re.compile(rf"(?:reducir|bajar|menos)\s+(\d+){UNIT_SUFFIX}")
EXERCISE_NAME_CAPTURE = re.compile(
    r"(?:cambiar|reemplazar).*?ejercicio.*?(?:por|con)\s+([a-záéíóúüñ\s]+)"
)


def _loose_capture(verbs: str, noun: str) -> Pattern:
    return re.compile(rf"(?:{verbs}).*?{noun}.*?(\d+){UNIT_SUFFIX}")


LOOSE_INTENSITY_UP = _loose_capture("más|mas|aumentar|subir", INTENSITY_NOUN)
LOOSE_INTENSITY_DOWN = _loose_capture("menos|reducir|bajar", INTENSITY_NOUN)
LOOSE_VOLUME_UP = _loose_capture("más|mas|aumentar|subir", VOLUME_NOUN)
LOOSE_VOLUME_DOWN = _loose_capture("menos|reducir|bajar", VOLUME_NOUN)

# Signed magnitudes used when no number can be captured
DEFAULT_LOAD_REDUCTION = 10
DEFAULT_LOAD_INCREASE = 5
DEFAULT_INTENSITY_INCREASE = 5
DEFAULT_INTENSITY_DECREASE = -10
DEFAULT_VOLUME_INCREASE = 10
DEFAULT_VOLUME_DECREASE = -15


def contains_all(text: str, words: Sequence[str]) -> bool:
    return all(word in text for word in words)


def contains_any(text: str, words: Sequence[str]) -> bool:
    return any(word in text for word in words)


def capture_number(text: str, pattern: Pattern) -> Optional[int]:
    """First integer captured by the pattern, or None."""
    match = pattern.search(text)
    return int(match.group(1)) if match else None


# =============================================================================
# Rules
# =============================================================================

@dataclass(frozen=True)
class IntentRule:
    """A predicate plus the builder that runs when it matches."""
    name: str
    matches: Callable[[str], bool]
    build: Callable[[str], ModificationRequest]


def _exercise_change(text: str) -> ModificationRequest:
    match = EXERCISE_NAME_CAPTURE.search(text)
    return ModificationRequest(
        type=ModificationType.EXERCISE_CHANGE,
        exercise_name=match.group(1).strip() if match else None,
        details="User requested to change an exercise",
    )


def _magnitude_builder(
    kind: ModificationType,
    pattern: Pattern,
    default: int,
    negate: bool,
    details: str,
) -> Callable[[str], ModificationRequest]:
    def build(text: str) -> ModificationRequest:
        captured = capture_number(text, pattern)
        if captured is None:
            value = default
        else:
            value = -captured if negate else captured
        return ModificationRequest(type=kind, value=value, details=details)
    return build


DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(
        "exercise_change",
        lambda t: contains_all(t, EXERCISE_CHANGE_KEYWORDS),
        _exercise_change,
    ),
    IntentRule(
        "load_reduction",
        lambda t: LOAD_REDUCTION_VERB in t and contains_any(t, LOAD_NOUNS),
        _magnitude_builder(
            ModificationType.LOAD_REDUCTION, DECREASE_CAPTURE, DEFAULT_LOAD_REDUCTION,
            negate=False, details="User requested to reduce load",
        ),
    ),
    IntentRule(
        "load_increase",
        lambda t: LOAD_INCREASE_VERB in t and contains_any(t, LOAD_NOUNS),
        _magnitude_builder(
            ModificationType.LOAD_INCREASE, INCREASE_CAPTURE, DEFAULT_LOAD_INCREASE,
            negate=False, details="User requested to increase load",
        ),
    ),
    IntentRule(
        "intensity_increase",
        lambda t: INTENSITY_NOUN in t and contains_any(t, INCREASE_WORDS),
        _magnitude_builder(
            ModificationType.INTENSITY_CHANGE, INCREASE_CAPTURE, DEFAULT_INTENSITY_INCREASE,
            negate=False, details="User requested to increase intensity",
        ),
    ),
    IntentRule(
        "intensity_decrease",
        lambda t: INTENSITY_NOUN in t and contains_any(t, DECREASE_WORDS),
        _magnitude_builder(
            ModificationType.INTENSITY_CHANGE, DECREASE_CAPTURE, DEFAULT_INTENSITY_DECREASE,
            negate=True, details="User requested to reduce intensity",
        ),
    ),
    IntentRule(
        "volume_increase",
        lambda t: VOLUME_NOUN in t and contains_any(t, INCREASE_WORDS),
        _magnitude_builder(
            ModificationType.VOLUME_CHANGE, INCREASE_CAPTURE, DEFAULT_VOLUME_INCREASE,
            negate=False, details="User requested to increase volume",
        ),
    ),
    IntentRule(
        "volume_decrease",
        lambda t: VOLUME_NOUN in t and contains_any(t, DECREASE_WORDS),
        _magnitude_builder(
            ModificationType.VOLUME_CHANGE, DECREASE_CAPTURE, DEFAULT_VOLUME_DECREASE,
            negate=True, details="User requested to reduce volume",
        ),
    ),
    # Second pass: looser keyword adjacency, number anywhere after the noun
    IntentRule(
        "loose_intensity_increase",
        lambda t: INTENSITY_NOUN in t and contains_any(t, LOOSE_INCREASE_WORDS),
        _magnitude_builder(
            ModificationType.INTENSITY_CHANGE, LOOSE_INTENSITY_UP, DEFAULT_INTENSITY_INCREASE,
            negate=False, details="User requested to increase intensity",
        ),
    ),
    IntentRule(
        "loose_intensity_decrease",
        lambda t: INTENSITY_NOUN in t and contains_any(t, LOOSE_DECREASE_WORDS),
        _magnitude_builder(
            ModificationType.INTENSITY_CHANGE, LOOSE_INTENSITY_DOWN, DEFAULT_INTENSITY_DECREASE,
            negate=True, details="User requested to reduce intensity",
        ),
    ),
    IntentRule(
        "loose_volume_increase",
        lambda t: VOLUME_NOUN in t and contains_any(t, LOOSE_INCREASE_WORDS),
        _magnitude_builder(
            ModificationType.VOLUME_CHANGE, LOOSE_VOLUME_UP, DEFAULT_VOLUME_INCREASE,
            negate=False, details="User requested to increase volume",
        ),
    ),
    IntentRule(
        "loose_volume_decrease",
        lambda t: VOLUME_NOUN in t and contains_any(t, LOOSE_DECREASE_WORDS),
        _magnitude_builder(
            ModificationType.VOLUME_CHANGE, LOOSE_VOLUME_DOWN, DEFAULT_VOLUME_DECREASE,
            negate=True, details="User requested to reduce volume",
        ),
    ),
)


class IntentParser(BaseService):
    """Classifies free text into a ModificationRequest."""

    def __init__(
        self,
        rules: Optional[Sequence[IntentRule]] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self.rules: Tuple[IntentRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    def match_rule(self, text: str) -> Optional[IntentRule]:
        """Return the first rule matching the text, if any."""
        lowered = text.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule
        return None

    def classify(self, text: str) -> ModificationRequest:
        """Parse a user request. Unrecognised text yields type 'none'."""
        lowered = text.lower()
        rule = self.match_rule(lowered)
        if rule is None:
            self.logger.debug("No modification intent found in request")
            return ModificationRequest(type=ModificationType.NONE)

        request = rule.build(lowered)
        self.logger.debug(f"Request matched rule '{rule.name}': {request.to_dict()}")
        return request
