"""
Static text used by the meme generator.

Caption pairs, ticker headlines and comic burst words. All tables are
tuples and are never mutated at runtime.
"""

from typing import NamedTuple, Tuple


class MemeText(NamedTuple):
    """A top/bottom caption pair."""
    top: str
    bottom: str


MEME_TEXTS: Tuple[MemeText, ...] = (
    MemeText("when u a potato", "but also a cat person"),
    MemeText("i can haz", "potato?"),
    MemeText("tater tot", "reporting for duty"),
    MemeText("am not cat", "am potato"),
    MemeText("potato cat", "the hero we deserve"),
    MemeText("one does not simply", "combine potatoes and cats"),
    MemeText("they told me i could be anything", "so i became a potato cat"),
    MemeText("this is fine", "everything is potato"),
    MemeText("cat.exe has stopped working", "potato.dll loaded instead"),
    MemeText("when the catnip hits", "and you become a potato"),
    MemeText("i showed you my potato", "please respond"),
    MemeText("therapist: potato cat isn't real", "potato cat:"),
    MemeText("nobody:", "potato cat at 3am:"),
    MemeText("me: i'm a normal person", "also me:"),
    MemeText("the last thing you see", "before you get mashed"),
    MemeText("you've been visited by", "the sacred potato cat"),
    MemeText("this image is cursed", "you're welcome"),
    MemeText("mom can we have a cat", "we have a cat at home. the cat at home:"),
    MemeText("roses are red", "potatoes are brown. this meme is cursed. please sit down"),
    MemeText("i have achieved", "peak internet"),
    MemeText("delete this", "nephew"),
    MemeText("what in tarnation", "is this abomination"),
    MemeText("thanks i hate it", "potato cat forever"),
    MemeText("it's not a phase mom", "i'm a potato cat now"),
    MemeText("the prophecy is true", "the potato cat has risen"),
)

TICKER_MESSAGES: Tuple[str, ...] = (
    "BREAKING: LOCAL POTATO ACHIEVES SENTIENCE, DEMANDS BELLY RUBS",
    "ALERT: SCIENTISTS CONFIRM CATS ARE 47% POTATO ON A MOLECULAR LEVEL",
    "DEVELOPING: POTATO-CAT HYBRID ESCAPES LAB, LAST SEEN HEADING TOWARD COUCH",
    "URGENT: WORLD POTATO SUPPLY NOW CONTROLLED BY CATS",
    "LIVE: POTATO ELECTED MAYOR OF INTERNET, CATS DEMAND RECOUNT",
    "THIS JUST IN: YOUR SCREEN IS NOW 100% MORE POTATO THAN BEFORE",
    "EXCLUSIVE: AREA CAT REFUSES TO ACKNOWLEDGE POTATO ROOMMATE",
)

BURST_WORDS: Tuple[str, ...] = (
    "POW!",
    "BAM!",
    "WOW!",
    "ZAP!",
    "BOOM!",
    "OMG!",
    "WHAM!",
    "BONK!",
    "MEOW!",
    "SPUD!",
)
