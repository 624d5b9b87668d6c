import os
from dataclasses import dataclass, replace
from typing import Optional

FEED_URL = "https://spreadsheets.google.com/feeds/list/0Ap3gNqa5sPMqdF8tVXZNcGViOFQxTm5tUFM5ZXcyZ1E/od6/public/values?alt=json"
PASSAGE_URL = "http://www.esvapi.org/v2/rest/passageQuery"
SEARCH_URL = "http://www.esvbible.org/"

STYLES = ("indented-embed", "flat-embed")
TITLE_VARIANTS = ("parenthetical", "words")


@dataclass(frozen=True)
class HarmonyConfig:
    api_key: str = ""
    style: str = "indented-embed"
    title_variant: str = "parenthetical"
    limit: Optional[int] = None
    feed_url: str = FEED_URL
    passage_url: str = PASSAGE_URL
    search_url: str = SEARCH_URL
    debug_dump: Optional[str] = None

    def __post_init__(self):
        if self.style not in STYLES:
            raise ValueError(f"Unknown style '{self.style}' (expected one of {', '.join(STYLES)})")
        if self.title_variant not in TITLE_VARIANTS:
            raise ValueError(f"Unknown title variant '{self.title_variant}' (expected one of {', '.join(TITLE_VARIANTS)})")

    def with_overrides(self, **changes):
        """Returns a copy with every non-None value in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def preset(cls, name, **changes):
        if name not in PRESETS:
            raise ValueError(f"Unknown preset '{name}' (expected one of {', '.join(PRESETS)})")
        return PRESETS[name].with_overrides(**changes)

    @classmethod
    def from_env(cls, preset=None):
        return cls.preset(
            preset or os.getenv("HARMONY_STYLE", "indented-embed"),
            api_key=os.getenv("ESV_API_KEY"),
            feed_url=os.getenv("HARMONY_FEED_URL"),
        )


# The two generators we ship side by side differ only in these settings.
PRESETS = {
    "indented-embed": HarmonyConfig(style="indented-embed", title_variant="parenthetical"),
    "flat-embed": HarmonyConfig(style="flat-embed", title_variant="words"),
}
