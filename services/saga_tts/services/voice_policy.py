"""
Character to voice assignment policy.

Assignment is a pure function of the character name, an optional
description and the policy configuration. Three modes are supported:

- ``hash``: stable hash of the lower-cased name modulo the voice pool
- ``gender``: classify the description (or the spoken line) by keyword,
  then hash within the matching gender pool
- ``random``: uniform pick from the pool, kept as a non-reproducible fallback

Reserved narrator names always resolve to the configured narrator voice.
"""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from ..shared.config import Settings
from ..shared.constants import (
    FEMALE_KEYWORDS,
    MALE_KEYWORDS,
    POLICY_MODES,
    PROVIDER_GENDER_POOLS,
    PROVIDER_NARRATOR_VOICES,
    PROVIDER_VOICE_POOLS,
)
from ..shared.errors import ConfigurationError, InvalidInput

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z]+")


@dataclass(frozen=True)
class VoicePolicy:
    """Configuration for voice assignment"""

    mode: str = "hash"
    pool: Tuple[str, ...] = ()
    gender_pools: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    narrator_names: Tuple[str, ...] = ("saga", "narrator")
    narrator_voice: Optional[str] = None
    male_keywords: Tuple[str, ...] = MALE_KEYWORDS
    female_keywords: Tuple[str, ...] = FEMALE_KEYWORDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "VoicePolicy":
        """Build the policy for the configured provider, applying env overrides"""
        provider = settings.tts_provider
        if settings.voice_policy not in POLICY_MODES:
            raise ConfigurationError(
                f"Unknown VOICE_POLICY '{settings.voice_policy}', expected one of {', '.join(POLICY_MODES)}"
            )

        default_gender = PROVIDER_GENDER_POOLS.get(provider, {})
        gender_pools = {
            "male": tuple(settings.voice_pool_male or default_gender.get("male", [])),
            "female": tuple(settings.voice_pool_female or default_gender.get("female", [])),
            "neutral": tuple(settings.voice_pool_neutral or default_gender.get("neutral", [])),
        }
        return cls(
            mode=settings.voice_policy,
            pool=tuple(settings.voice_pool or PROVIDER_VOICE_POOLS.get(provider, [])),
            gender_pools=gender_pools,
            narrator_names=tuple(settings.narrator_names),
            narrator_voice=settings.narrator_voice or PROVIDER_NARRATOR_VOICES.get(provider),
        )


@dataclass(frozen=True)
class VoiceSelection:
    voice: str
    category: Optional[str] = None


def normalize_name(name: str) -> str:
    return name.strip().lower()


def stable_hash(text: str) -> int:
    """32-bit signed rolling hash (``h = h * 31 + code``)."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return h


def detect_gender(text: Optional[str], policy: Optional[VoicePolicy] = None) -> str:
    """
    Classify free text as ``male``, ``female`` or ``neutral``.

    Matching is done on whole words, male keywords first, so
    "an old king" is male and "a woman" is not matched by "man".
    Plurals ending in "s" or "es" match their keyword ("two kings").
    """
    policy = policy or VoicePolicy()
    words = set()
    for word in _WORD_RE.findall((text or "").lower()):
        words.add(word)
        if word.endswith("es"):
            words.add(word[:-2])
        if word.endswith("s"):
            words.add(word[:-1])
    if not words:
        return "neutral"
    for keyword in policy.male_keywords:
        if keyword in words:
            return "male"
    for keyword in policy.female_keywords:
        if keyword in words:
            return "female"
    return "neutral"


def _pick_by_hash(name: str, pool: Sequence[str]) -> str:
    return pool[abs(stable_hash(normalize_name(name))) % len(pool)]


def assign_voice(
    name: str,
    policy: VoicePolicy,
    description: Optional[str] = None,
    text: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> VoiceSelection:
    """
    Select a voice for ``name`` under ``policy``.

    Args:
        name: Character name; must not be blank.
        policy: Policy configuration.
        description: Optional character description used by ``gender`` mode.
        text: Dialogue line, classified when no description is given.
        rng: Random source for ``random`` mode.

    Raises:
        InvalidInput: if the name is blank.
        ConfigurationError: if the pool to choose from is empty.
    """
    if not name or not name.strip():
        raise InvalidInput("Character name must not be empty")

    if normalize_name(name) in policy.narrator_names:
        if not policy.narrator_voice:
            raise ConfigurationError("No narrator voice configured")
        return VoiceSelection(policy.narrator_voice, "narrator")

    if policy.mode == "gender":
        category = detect_gender(description if description else text, policy)
        pool = policy.gender_pools.get(category) or policy.gender_pools.get("neutral")
        if not pool:
            raise ConfigurationError(f"Voice pool for '{category}' voices is empty")
        return VoiceSelection(_pick_by_hash(name, pool), category)

    if not policy.pool:
        raise ConfigurationError("Voice pool is empty")

    if policy.mode == "random":
        return VoiceSelection((rng or random).choice(policy.pool))

    if policy.mode != "hash":
        raise ConfigurationError(f"Unknown voice policy mode '{policy.mode}'")
    return VoiceSelection(_pick_by_hash(name, policy.pool))
