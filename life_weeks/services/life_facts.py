"""Life Weeks facts: the rotating "did you know" line.

Generic facts are shown before a birthdate is known; once a
StatisticsRecord exists, the personalized list quotes its numbers.
"""

import math
import random
from typing import List, Optional, Sequence

from ..utils.formatting import format_number
from .life_stats import StatisticsRecord


BASIC_FACTS = [
    "The average person will spend 25 years asleep in their lifetime",
    "You blink about 17,000 times per day",
    "Your heart will beat about 2.5 billion times in your lifetime",
    "The atoms in your body are mostly empty space - you're 99.999% nothing",
    "The average person walks 7,500 miles per year",
    "You experience about 12 full moons each year",
    "The light from distant stars you see at night started its journey before you were born",
    "Every 7 years, your body replaces most of its cells",
    "You share 99.9% of your DNA with every other human on Earth",
    "Your brain uses 20% of your body's total energy despite being only 2% of your weight",
    "Your fingerprints are completely unique",
    "You shed about 30,000 dead skin cells every minute",
    "Your sense of smell can distinguish between 1 trillion different scents",
    "The human eye can distinguish about 10 million colors",
    "Your body produces about 25 million new cells every second",
]


def personalized_facts(stats: StatisticsRecord) -> List[str]:
    """Build the fact list quoting the user's own numbers."""
    days = stats.days_lived
    return [
        "The average person will spend 25 years asleep in their lifetime",
        f"You have blinked approximately {format_number(stats.blinks)} times since birth",
        "Your heart will beat about 2.5 billion times in your lifetime",
        "The atoms in your body are mostly empty space - you are 99.999% nothing",
        f"You have walked approximately {format_number(days * 7500 // 365)} miles in your lifetime",
        f"You have witnessed {stats.full_moons_witnessed} full moon cycles",
        "The light from distant stars you see at night started its journey before you were born",
        "Every 7 years, your body replaces most of its cells - you are literally a different person",
        f"Your hair has grown approximately {math.floor(days * 0.44)} inches since birth",
        "You share 99.9% of your DNA with every other human on Earth",
        f"You have consumed roughly {format_number(days * 2)} liters of water",
        f"You have said approximately {format_number(stats.words_spoken)} words",
        f"You have laughed roughly {format_number(stats.times_laughed)} times",
        f"You have taken approximately {format_number(days * 20000)} steps",
        f"You have dreamed for roughly {format_number(stats.hours_slept // 4)} hours",
    ]


def get_facts(stats: Optional[StatisticsRecord] = None) -> List[str]:
    """Facts for the current view: personalized when stats exist."""
    if stats is None:
        return list(BASIC_FACTS)
    return personalized_facts(stats)


def first_fact(facts: Sequence[str]) -> str:
    """The fact shown immediately after a birthdate is submitted."""
    if not facts:
        raise ValueError("facts cannot be empty")
    return facts[0]


def pick_fact(facts: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Pick the next fact to rotate in.

    Args:
        facts: Candidate facts.
        rng: Random source; pass a seeded instance for reproducible picks.
    """
    if not facts:
        raise ValueError("facts cannot be empty")
    rng = rng or random.Random()
    return facts[rng.randrange(len(facts))]
