"""Random motivational quote selection."""

import logging
import math
import random
from typing import Sequence


logger = logging.getLogger(__name__)

QUOTES = (
    "Tetap berjuang — waktumu akan tiba.",
    "Tidak ada usaha yang sia-sia.",
    "Kamu jauh lebih kuat dari yang kamu pikirkan.",
    "Fokus hari ini menentukan masa depanmu.",
    "Langkah kecil hari ini adalah kemenangan besar esok.",
)


class QuoteSelector:
    """Picks one quote uniformly at random on every call."""

    def __init__(
        self,
        quotes: Sequence[str] = QUOTES,
        rng: random.Random | None = None,
    ) -> None:
        if len(quotes) == 0:
            raise ValueError("quotes must not be empty")
        self._quotes = tuple(quotes)
        self._rng = rng if rng is not None else random.Random()

    def pick(self) -> str:
        index = math.floor(self._rng.random() * len(self._quotes))
        logger.debug("quote_selected index=%s", index)
        return self._quotes[index]
