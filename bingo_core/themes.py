from __future__ import annotations

from typing import Dict, List, Tuple

# key -> (display name, songs). Empty lists are themes whose songs are loaded by hand.
THEMES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "60s": ("1960s", ()),
    "70s": ("1970s", ()),
    "80s": ("1980s", (
        "Bon Jovi - Livin' on a Prayer",
        "Michael Jackson - Billie Jean",
        "A-ha - Take On Me",
        "Journey - Don’t Stop Believin’",
        "Cyndi Lauper - Girls Just Want to Have Fun",
        "Toto - Africa",
        "Rick Astley - Never Gonna Give You Up",
        "Eurythmics - Sweet Dreams (Are Made of This)",
        "Queen - Another One Bites the Dust",
        "Whitney Houston - I Wanna Dance with Somebody",
        "Prince - Purple Rain",
        "Survivor - Eye of the Tiger",
        "Madonna - Like a Prayer",
        "Hall & Oates - You Make My Dreams",
        "Kenny Loggins - Footloose",
        "Billy Idol - Dancing with Myself",
        "Huey Lewis & The News - The Power of Love",
        "Soft Cell - Tainted Love",
        "The Police - Every Breath You Take",
        "Phil Collins - In the Air Tonight",
        "Dexys Midnight Runners - Come On Eileen",
        "REO Speedwagon - Keep On Loving You",
        "Joan Jett - I Love Rock 'n Roll",
        "Guns N’ Roses - Sweet Child O’ Mine",
        "Poison - Every Rose Has Its Thorn",
    )),
    "90s": ("1990s", ()),
    "2000s": ("2000s", ()),
    "girlPower": ("Girl Power", ()),
    "soundtracks": ("Soundtracks & TV Themes", ()),
    "oneHitWonders": ("1 Hit Wonders", ()),
    "numberOnes": ("#1 Hits", ()),
    "animals": ("Animals", ()),
    "foodDrink": ("Food & Drink", ()),
    "bodyParts": ("Body Parts", ()),
    "love": ("Love", ()),
    "dance": ("Dance", ()),
    "holiday": ("Holiday / Seasonal", ()),
    "classicRock": ("Classic Rock", ()),
    "popRnb": ("Pop / R&B", (
        "Michael Jackson - Bad",
        "Michael Jackson - Billie Jean",
        "Michael Jackson - Black or White",
        "Michael Jackson - Don't Stop Til You Get Enough",
        "Michael Jackson - Man In The Mirror",
        "Michael Jackson - Scream",
        "Michael Jackson - Smooth Criminal",
        "Michael Jackson - Thriller",
    )),
    "alternative": ("Alternative", ()),
    "rock": ("Rock", ()),
    "country": ("Country", ()),
}


def theme_songs(key: str) -> List[str]:
    return list(THEMES[key][1])


def theme_list() -> List[dict]:
    return [{"key": k, "displayName": name, "songCount": len(songs)} for k, (name, songs) in THEMES.items()]


def parse_song_lines(text: str) -> List[str]:
    """One label per line, blank lines dropped (theme editor format)."""
    return [s.strip() for s in (text or "").split("\n") if s.strip()]
