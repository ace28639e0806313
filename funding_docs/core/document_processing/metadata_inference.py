"""
Filename metadata inference.

Guesses the political party and prefecture a funding report belongs to
from keywords in its filename. First match wins; no match gives "unknown".

Dependencies: pydantic
System role: Upload-time metadata enrichment
"""

from pydantic import BaseModel

UNKNOWN = "unknown"

# (keywords, canonical party name), checked in order
PARTY_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("自民", "自由民主"), "自由民主党"),
    (("立憲", "立民"), "立憲民主党"),
    (("公明",), "公明党"),
    (("維新",), "日本維新の会"),
    (("共産",), "日本共産党"),
    (("国民民主",), "国民民主党"),
)

PREFECTURES: tuple[str, ...] = (
    "北海道", "青森", "岩手", "宮城", "秋田", "山形", "福島",
    "茨城", "栃木", "群馬", "埼玉", "千葉", "東京", "神奈川",
    "新潟", "富山", "石川", "福井", "山梨", "長野", "岐阜",
    "静岡", "愛知", "三重", "滋賀", "京都", "大阪", "兵庫",
    "奈良", "和歌山", "鳥取", "島根", "岡山", "広島", "山口",
    "徳島", "香川", "愛媛", "高知", "福岡", "佐賀", "長崎",
    "熊本", "大分", "宮崎", "鹿児島", "沖縄",
)


class FilenameMetadata(BaseModel):
    """Metadata inferred from an upload's filename."""

    party_name: str = UNKNOWN
    region: str = UNKNOWN


def infer_party(filename: str) -> str:
    """Return the canonical party name mentioned in filename, or "unknown"."""
    name = filename.lower()
    for keywords, party in PARTY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return party
    return UNKNOWN


def infer_region(filename: str) -> str:
    """Return the first prefecture mentioned in filename, or "unknown"."""
    for prefecture in PREFECTURES:
        if prefecture in filename:
            return prefecture
    return UNKNOWN


def infer_metadata(filename: str) -> FilenameMetadata:
    """
    Infer party and region from a filename.

    Args:
        filename: Original upload filename

    Returns:
        FilenameMetadata: Inferred values, "unknown" where nothing matched
    """
    return FilenameMetadata(party_name=infer_party(filename), region=infer_region(filename))
