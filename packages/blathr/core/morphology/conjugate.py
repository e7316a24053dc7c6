"""Verb inflection: past tense, participles, third person and auxiliaries."""

from __future__ import annotations

from blathr.core.enums import GrammaticalNumber, Tense

# base -> (past tense, past participle, present participle, third person singular)
IRREGULAR_VERBS: dict[str, tuple[str, str, str, str]] = {
    "be": ("was", "been", "being", "is"),
    "have": ("had", "had", "having", "has"),
    "do": ("did", "done", "doing", "does"),
    "go": ("went", "gone", "going", "goes"),
    "say": ("said", "said", "saying", "says"),
    "get": ("got", "gotten", "getting", "gets"),
    "make": ("made", "made", "making", "makes"),
    "know": ("knew", "known", "knowing", "knows"),
    "think": ("thought", "thought", "thinking", "thinks"),
    "take": ("took", "taken", "taking", "takes"),
    "see": ("saw", "seen", "seeing", "sees"),
    "come": ("came", "come", "coming", "comes"),
    "want": ("wanted", "wanted", "wanting", "wants"),
    "use": ("used", "used", "using", "uses"),
    "find": ("found", "found", "finding", "finds"),
    "give": ("gave", "given", "giving", "gives"),
    "tell": ("told", "told", "telling", "tells"),
    "work": ("worked", "worked", "working", "works"),
    "call": ("called", "called", "calling", "calls"),
    "try": ("tried", "tried", "trying", "tries"),
    "ask": ("asked", "asked", "asking", "asks"),
    "need": ("needed", "needed", "needing", "needs"),
    "feel": ("felt", "felt", "feeling", "feels"),
    "become": ("became", "become", "becoming", "becomes"),
    "leave": ("left", "left", "leaving", "leaves"),
    "put": ("put", "put", "putting", "puts"),
    "mean": ("meant", "meant", "meaning", "means"),
    "keep": ("kept", "kept", "keeping", "keeps"),
    "let": ("let", "let", "letting", "lets"),
    "begin": ("began", "begun", "beginning", "begins"),
    "seem": ("seemed", "seemed", "seeming", "seems"),
    "help": ("helped", "helped", "helping", "helps"),
    "show": ("showed", "shown", "showing", "shows"),
    "hear": ("heard", "heard", "hearing", "hears"),
    "play": ("played", "played", "playing", "plays"),
    "run": ("ran", "run", "running", "runs"),
    "move": ("moved", "moved", "moving", "moves"),
    "live": ("lived", "lived", "living", "lives"),
    "believe": ("believed", "believed", "believing", "believes"),
    "hold": ("held", "held", "holding", "holds"),
    "bring": ("brought", "brought", "bringing", "brings"),
    "happen": ("happened", "happened", "happening", "happens"),
    "write": ("wrote", "written", "writing", "writes"),
    "provide": ("provided", "provided", "providing", "provides"),
    "sit": ("sat", "sat", "sitting", "sits"),
    "stand": ("stood", "stood", "standing", "stands"),
    "lose": ("lost", "lost", "losing", "loses"),
    "pay": ("paid", "paid", "paying", "pays"),
    "meet": ("met", "met", "meeting", "meets"),
    "include": ("included", "included", "including", "includes"),
    "continue": ("continued", "continued", "continuing", "continues"),
    "set": ("set", "set", "setting", "sets"),
    "learn": ("learned", "learned", "learning", "learns"),
    "change": ("changed", "changed", "changing", "changes"),
    "lead": ("led", "led", "leading", "leads"),
    "understand": ("understood", "understood", "understanding", "understands"),
    "watch": ("watched", "watched", "watching", "watches"),
    "follow": ("followed", "followed", "following", "follows"),
    "stop": ("stopped", "stopped", "stopping", "stops"),
    "create": ("created", "created", "creating", "creates"),
    "speak": ("spoke", "spoken", "speaking", "speaks"),
    "read": ("read", "read", "reading", "reads"),
    "spend": ("spent", "spent", "spending", "spends"),
    "grow": ("grew", "grown", "growing", "grows"),
    "open": ("opened", "opened", "opening", "opens"),
    "walk": ("walked", "walked", "walking", "walks"),
    "win": ("won", "won", "winning", "wins"),
    "offer": ("offered", "offered", "offering", "offers"),
    "remember": ("remembered", "remembered", "remembering", "remembers"),
    "consider": ("considered", "considered", "considering", "considers"),
    "appear": ("appeared", "appeared", "appearing", "appears"),
    "buy": ("bought", "bought", "buying", "buys"),
    "wait": ("waited", "waited", "waiting", "waits"),
    "serve": ("served", "served", "serving", "serves"),
    "die": ("died", "died", "dying", "dies"),
    "send": ("sent", "sent", "sending", "sends"),
    "build": ("built", "built", "building", "builds"),
    "stay": ("stayed", "stayed", "staying", "stays"),
    "fall": ("fell", "fallen", "falling", "falls"),
    "cut": ("cut", "cut", "cutting", "cuts"),
    "reach": ("reached", "reached", "reaching", "reaches"),
    "kill": ("killed", "killed", "killing", "kills"),
    "remain": ("remained", "remained", "remaining", "remains"),
    "suggest": ("suggested", "suggested", "suggesting", "suggests"),
    "raise": ("raised", "raised", "raising", "raises"),
    "pass": ("passed", "passed", "passing", "passes"),
    "sell": ("sold", "sold", "selling", "sells"),
    "require": ("required", "required", "requiring", "requires"),
    "report": ("reported", "reported", "reporting", "reports"),
    "decide": ("decided", "decided", "deciding", "decides"),
    "pull": ("pulled", "pulled", "pulling", "pulls"),
    "break": ("broke", "broken", "breaking", "breaks"),
    "catch": ("caught", "caught", "catching", "catches"),
    "drive": ("drove", "driven", "driving", "drives"),
    "eat": ("ate", "eaten", "eating", "eats"),
    "fly": ("flew", "flown", "flying", "flies"),
    "forget": ("forgot", "forgotten", "forgetting", "forgets"),
    "hit": ("hit", "hit", "hitting", "hits"),
    "hurt": ("hurt", "hurt", "hurting", "hurts"),
    "lay": ("laid", "laid", "laying", "lays"),
    "lie": ("lay", "lain", "lying", "lies"),
    "ride": ("rode", "ridden", "riding", "rides"),
    "ring": ("rang", "rung", "ringing", "rings"),
    "rise": ("rose", "risen", "rising", "rises"),
    "seek": ("sought", "sought", "seeking", "seeks"),
    "shake": ("shook", "shaken", "shaking", "shakes"),
    "shine": ("shone", "shone", "shining", "shines"),
    "shoot": ("shot", "shot", "shooting", "shoots"),
    "shut": ("shut", "shut", "shutting", "shuts"),
    "sing": ("sang", "sung", "singing", "sings"),
    "sink": ("sank", "sunk", "sinking", "sinks"),
    "sleep": ("slept", "slept", "sleeping", "sleeps"),
    "slide": ("slid", "slid", "sliding", "slides"),
    "steal": ("stole", "stolen", "stealing", "steals"),
    "stick": ("stuck", "stuck", "sticking", "sticks"),
    "strike": ("struck", "struck", "striking", "strikes"),
    "swim": ("swam", "swum", "swimming", "swims"),
    "swing": ("swung", "swung", "swinging", "swings"),
    "teach": ("taught", "taught", "teaching", "teaches"),
    "tear": ("tore", "torn", "tearing", "tears"),
    "throw": ("threw", "thrown", "throwing", "throws"),
    "wake": ("woke", "woken", "waking", "wakes"),
    "wear": ("wore", "worn", "wearing", "wears"),
}

_VOWELS = "aeiou"


def should_double_consonant(verb: str) -> bool:
    """Return True if a verb doubles its final consonant before -ed/-ing.

    Applies the consonant-vowel-consonant rule for short verbs ("stop" ->
    "stopped"); final w, x and y never double.
    """
    if len(verb) < 2:
        return False

    last = verb[-1]
    second_last = verb[-2]
    if last in _VOWELS or second_last not in _VOWELS:
        return False
    if len(verb) >= 3 and verb[-3] in _VOWELS:
        return False
    return last not in "wxy"


def _ends_consonant_y(lower: str) -> bool:
    return lower.endswith("y") and (len(lower) < 2 or lower[-2] not in _VOWELS)


def past_tense(verb: str) -> str:
    """Return the simple past of a verb.

    Example:
        >>> past_tense("go")
        'went'
        >>> past_tense("carry")
        'carried'
    """
    lower = verb.lower()
    if lower in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[lower][0]
    if lower.endswith("e"):
        return verb + "d"
    if _ends_consonant_y(lower):
        return verb[:-1] + "ied"
    if should_double_consonant(lower):
        return verb + verb[-1] + "ed"
    return verb + "ed"


def past_participle(verb: str) -> str:
    """Return the past participle of a verb."""
    lower = verb.lower()
    if lower in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[lower][1]
    return past_tense(verb)


def present_participle(verb: str) -> str:
    """Return the -ing form of a verb."""
    lower = verb.lower()
    if lower in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[lower][2]
    if lower.endswith("ie"):
        return verb[:-2] + "ying"
    if lower.endswith("e") and not lower.endswith("ee"):
        return verb[:-1] + "ing"
    if should_double_consonant(lower):
        return verb + verb[-1] + "ing"
    return verb + "ing"


def third_person_singular(verb: str) -> str:
    """Return the third person singular present of a verb."""
    lower = verb.lower()
    if lower in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[lower][3]
    if lower.endswith(("s", "x", "z", "ch", "sh", "o")):
        return verb + "es"
    if _ends_consonant_y(lower):
        return verb[:-1] + "ies"
    return verb + "s"


def conjugate_be(number: GrammaticalNumber, person: int, tense: Tense = Tense.PRESENT) -> str:
    """Return the form of "be" agreeing with a subject."""
    if tense == Tense.PAST:
        if number == GrammaticalNumber.SINGULAR and person != 2:
            return "was"
        return "were"
    if tense == Tense.FUTURE:
        return "will be"
    if number == GrammaticalNumber.SINGULAR:
        if person == 1:
            return "am"
        if person == 3:
            return "is"
    return "are"


def conjugate_have(number: GrammaticalNumber, person: int, tense: Tense = Tense.PRESENT) -> str:
    """Return the form of "have" agreeing with a subject."""
    if tense == Tense.PAST:
        return "had"
    if tense == Tense.FUTURE:
        return "will have"
    if number == GrammaticalNumber.SINGULAR and person == 3:
        return "has"
    return "have"


def conjugate_do(number: GrammaticalNumber, person: int, tense: Tense = Tense.PRESENT) -> str:
    """Return the do-support auxiliary for a subject."""
    if tense == Tense.PAST:
        return "did"
    if tense == Tense.FUTURE:
        return "will do"
    if number == GrammaticalNumber.SINGULAR and person == 3:
        return "does"
    return "do"
