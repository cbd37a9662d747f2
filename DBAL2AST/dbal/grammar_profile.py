"""Controllable DBAL lexer extension mechanism.

Goal:
- Keep the default token rules stable.
- Allow opt-in extensions via an explicit profile (version + feature flags).

The default profile reproduces the base rules exactly; extensions only ever
turn an input that would otherwise raise a lexical error into a token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional


# Feature flags (string constants)
FEATURE_UNDERSCORE_IDENTIFIERS = "underscore_identifiers"  # allow '_' in identifiers
FEATURE_NUMBERS = "numbers"  # lex digit runs (optionally with one fraction) as Number

KNOWN_FEATURES: FrozenSet[str] = frozenset({
    FEATURE_UNDERSCORE_IDENTIFIERS,
    FEATURE_NUMBERS,
})


@dataclass(frozen=True)
class DBALGrammarProfile:
    """A profile controlling which optional lexer extensions are enabled."""

    version: str = "v1"
    features: FrozenSet[str] = field(default_factory=frozenset)

    def enabled(self, feature: str) -> bool:
        return feature in self.features


def build_profile(version: str = "v1", features: Optional[Iterable[str]] = None) -> DBALGrammarProfile:
    """Build a profile, rejecting unknown feature names."""
    feats = frozenset(f.strip() for f in (features or []) if f and f.strip())
    unknown = feats - KNOWN_FEATURES
    if unknown:
        raise ValueError(
            f"Unknown DBAL grammar feature(s): {', '.join(sorted(unknown))}. "
            f"Known features: {', '.join(sorted(KNOWN_FEATURES))}"
        )
    return DBALGrammarProfile(version=version, features=feats)


def parse_profile_string(spec: str) -> DBALGrammarProfile:
    """Parse ``profile:v1+numbers+underscore_identifiers`` into a profile.

    A bare ``v1+numbers`` (without the ``profile:`` prefix) is accepted too.
    """
    text = (spec or "").strip()
    if text.startswith("profile:"):
        text = text[len("profile:"):].strip()
    if not text:
        return DBALGrammarProfile()
    parts = [p for p in text.split("+") if p]
    return build_profile(version=parts[0], features=parts[1:])
