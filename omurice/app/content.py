"""Localized UI text (en-US, ja-JP)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

SUPPORTED_LOCALES: Tuple[str, ...] = ("en-US", "ja-JP")
DEFAULT_LOCALE = "en-US"


@dataclass(frozen=True)
class Content:
    title: str
    description: str
    start_game_button: str
    about_game_button: str
    return_to_home_button: str
    another_one_button: str
    download_button: str
    select_language_button: str
    language_name: str
    about_heading: str
    about_paragraphs: Tuple[str, ...]
    credit: str


_CONTENT = {
    "en-US": Content(
        title="Maid Cafe Omurice Simulator",
        description="Pen your next masterpiece in ketchup",
        start_game_button="Start drawing",
        about_game_button="What's this?",
        return_to_home_button="Return to home",
        another_one_button="Another one",
        download_button="Download",
        select_language_button="Select a language",
        language_name="English",
        about_heading="What's this about?",
        about_paragraphs=(
            "Japanese maid cafes have a staple dish, omurice. The maids will "
            "often draw cute pictures on omurice using ketchup.",
            "Omurice drawing is a fun medium of creative expression. This "
            "simulator captures some of that magic.",
            "Draw a person, place, thing, or message in ketchup and share it "
            "with those dear to you.",
        ),
        credit="Made by Chris Andrejewski",
    ),
    "ja-JP": Content(
        title="メイドカフェオムライスシミュレーター",
        description="ケチャップで次の傑作を書き留める",
        start_game_button="描き始める",
        about_game_button="ゲームについて",
        return_to_home_button="トップに戻る",
        another_one_button="もう一つ作る",
        download_button="ダウンロードする",
        select_language_button="言語を選択",
        language_name="日本語",
        about_heading="これって何ですか？",
        about_paragraphs=(
            "日本のメイドカフェには、代表的な料理としてオムライスがありますね。"
            "メイドたちはよく、ケチャップを使ってオムライスにかわいい絵を描いてくれます。",
            "オムライスの絵描きは、創造的な表現の楽しい方法です。"
            "このシミュレーターでその楽しさを体験してみませんか？",
            "人、場所、物、またはメッセージをケチャップで描いて、大切な人とシェアしましょう。",
        ),
        credit="クリス・アンドレジェスキによって製作されました。",
    ),
}


def resolve_locale(locale: str | None) -> str:
    """Return ``locale`` if supported, else the default."""
    return locale if locale in _CONTENT else DEFAULT_LOCALE


def get_content(locale: str | None) -> Content:
    return _CONTENT[resolve_locale(locale)]


def next_locale(locale: str | None) -> str:
    """Cycle to the following supported locale (language toggle)."""
    current = resolve_locale(locale)
    i = SUPPORTED_LOCALES.index(current)
    return SUPPORTED_LOCALES[(i + 1) % len(SUPPORTED_LOCALES)]
