"""Voice pools and keyword tables for the relay"""

# Voices accepted by the OpenAI speech endpoint
OPENAI_VOICES = [
    "alloy", "echo", "fable", "onyx", "nova", "shimmer",
    "coral", "verse", "ballad", "ash", "sage", "marin", "cedar",
]

OPENAI_GENDER_POOLS = {
    "male": ["onyx", "echo", "ash", "ballad", "cedar"],
    "female": ["nova", "shimmer", "coral", "sage", "marin"],
    "neutral": ["alloy", "fable", "verse"],
}

# Deepgram addresses voices by model name
DEEPGRAM_GENDER_POOLS = {
    "male": ["aura-2-orion-en", "aura-2-arcas-en", "aura-2-apollo-en", "aura-2-zeus-en"],
    "female": ["aura-2-thalia-en", "aura-2-luna-en", "aura-2-athena-en", "aura-2-hera-en"],
    "neutral": ["aura-2-asteria-en", "aura-2-andromeda-en"],
}
DEEPGRAM_VOICES = [v for pool in DEEPGRAM_GENDER_POOLS.values() for v in pool]

PROVIDER_VOICE_POOLS = {
    "openai": OPENAI_VOICES,
    "deepgram": DEEPGRAM_VOICES,
}
PROVIDER_GENDER_POOLS = {
    "openai": OPENAI_GENDER_POOLS,
    "deepgram": DEEPGRAM_GENDER_POOLS,
}
PROVIDER_NARRATOR_VOICES = {
    "openai": "verse",
    "deepgram": "aura-2-orion-en",
}

# Matched as whole words or their -s/-es plurals, so "woman" never hits "man"
# and "kingly" stays neutral. Irregular plurals are listed explicitly.
MALE_KEYWORDS = ("man", "men", "male", "boy", "king", "lord", "father", "son", "prince", "wizard")
FEMALE_KEYWORDS = (
    "woman", "women", "female", "girl", "queen", "lady", "ladies",
    "mother", "daughter", "princess", "witch",
)

POLICY_MODES = ("hash", "gender", "random")
