import logging
from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app

from ..errors import AdviceProviderError
from .tips import FALLBACK_TIPS, build_prompt, parse_tips

logger = logging.getLogger(__name__)

EXTENSION_KEY = "budgetbuddy.advice"


@dataclass
class AdviceResult:
    tips: List[str] = field(default_factory=list)
    ok: bool = True
    method: str = "json"
    message: Optional[str] = None


class AdviceService:
    """Asks a provider for savings tips about a list of expenses.

    One attempt per request. Anything that goes wrong, from transport errors
    to an unreadable reply, ends in the fixed fallback tips with ``ok=False``.
    """

    def __init__(self, provider):
        self.provider = provider

    def get_advice(self, expenses) -> AdviceResult:
        prompt = build_prompt(expenses)
        try:
            text = self.provider.complete(prompt)
        except AdviceProviderError:
            logger.exception("Advice provider %s failed", self.provider.name)
            return self.fallback("Failed to get AI advice")
        except Exception:
            logger.exception("Advice provider %s raised an unexpected error", self.provider.name)
            return self.fallback("Failed to get AI advice")

        parsed = parse_tips(text)
        if not parsed.ok:
            logger.warning("Could not read tips from %s reply: %.200r", self.provider.name, text)
            return self.fallback("Failed to get AI advice")
        if parsed.method == "heuristic":
            logger.warning("%s reply was not JSON; recovered %d tip(s) from plain lines",
                           self.provider.name, len(parsed.tips))
        return AdviceResult(tips=parsed.tips, ok=True, method=parsed.method)

    @staticmethod
    def fallback(message):
        return AdviceResult(tips=list(FALLBACK_TIPS), ok=False, method="fallback", message=message)


def get_advice_service() -> AdviceService:
    return current_app.extensions[EXTENSION_KEY]
