"""Base generator class for all card generators."""

from __future__ import annotations

from abc import ABC
from datetime import datetime
from typing import Callable

from faker import Faker

from voucher_gen.models.base import utc_now


class BaseGenerator(ABC):
    """Base class for all generators.

    Provides common initialization: Faker instance creation,
    seed-based reproducibility, and an injectable clock.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    clock : Callable[[], datetime] | None
        Returns the current time; defaults to timezone-aware UTC now.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.fake = Faker(locale)
        self.clock = clock or utc_now
        if seed is not None:
            self.fake.seed_instance(seed)
