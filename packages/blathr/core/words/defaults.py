"""Curated default word tables.

Used when no lexicon is loaded, or when the lexicon has no term set for a
requested part of speech.
"""

from __future__ import annotations

from blathr.core.enums import PartOfSpeech

# Common nouns (countable)
DEFAULT_NOUNS: tuple[str, ...] = (
    "idea", "system", "problem", "question", "answer", "plan", "reason", "result",
    "group", "project", "team", "process", "change", "way", "part", "place",
    "case", "point", "fact", "example", "issue", "matter", "thing", "situation",
    "area", "level", "type", "kind", "form", "method", "approach", "solution",
    "person", "company", "organization", "market", "industry", "service", "product",
    "customer", "client", "user", "employee", "manager", "leader", "expert",
    "report", "document", "policy", "strategy", "goal", "objective", "target",
    "decision", "action", "step", "task", "activity", "event", "meeting",
    "resource", "tool", "technology", "data", "information", "knowledge", "skill",
    "opportunity", "challenge", "risk", "benefit", "value", "cost", "time",
)


# Common verbs (base form)
DEFAULT_VERBS: tuple[str, ...] = (
    "be", "have", "do", "say", "get", "make", "go", "know", "take", "see",
    "come", "think", "look", "want", "give", "use", "find", "tell", "ask", "work",
    "seem", "feel", "try", "leave", "call", "need", "become", "put", "mean", "keep",
    "let", "begin", "show", "hear", "play", "run", "move", "live", "believe", "hold",
    "bring", "happen", "write", "provide", "sit", "stand", "lose", "pay", "meet",
    "include", "continue", "set", "learn", "change", "lead", "understand", "watch",
    "follow", "stop", "create", "speak", "read", "spend", "grow", "open", "walk",
    "offer", "remember", "consider", "appear", "buy", "wait", "serve", "send",
    "expect", "build", "stay", "fall", "cut", "reach", "remain", "suggest", "raise",
    "pass", "sell", "require", "report", "decide", "support", "develop", "produce",
    "achieve", "improve", "increase", "reduce", "manage", "maintain", "ensure",
)


# Common adjectives
DEFAULT_ADJECTIVES: tuple[str, ...] = (
    "good", "new", "first", "last", "long", "great", "little", "own", "other",
    "old", "right", "big", "high", "different", "small", "large", "next", "early",
    "young", "important", "few", "public", "bad", "same", "able", "sure", "real",
    "best", "better", "true", "certain", "clear", "full", "special", "free",
    "strong", "hard", "likely", "simple", "recent", "possible", "whole", "current",
    "general", "specific", "available", "significant", "particular", "major",
    "successful", "effective", "essential", "critical", "key", "primary", "main",
    "direct", "positive", "negative", "basic", "common", "serious", "difficult",
    "similar", "final", "previous", "additional", "individual", "professional",
)


# Common adverbs
DEFAULT_ADVERBS: tuple[str, ...] = (
    "also", "just", "only", "now", "then", "more", "very", "well", "even", "still",
    "already", "often", "always", "never", "really", "much", "most", "almost",
    "here", "there", "together", "quite", "soon", "perhaps", "probably", "actually",
    "simply", "certainly", "clearly", "definitely", "directly", "easily", "especially",
    "eventually", "exactly", "finally", "frequently", "generally", "greatly",
    "highly", "immediately", "increasingly", "indeed", "naturally", "nearly",
    "necessarily", "normally", "obviously", "particularly", "possibly", "primarily",
    "quickly", "rapidly", "recently", "regularly", "significantly", "slightly",
    "sometimes", "specifically", "strongly", "successfully", "suddenly", "typically",
)


# Common prepositions
DEFAULT_PREPOSITIONS: tuple[str, ...] = (
    "of", "in", "to", "for", "with", "on", "at", "from", "by", "about",
    "as", "into", "through", "during", "before", "after", "above", "below",
    "between", "under", "since", "without", "toward", "upon", "within",
    "against", "among", "across", "behind", "beyond", "over", "around",
    "throughout", "despite", "near", "along", "beside", "outside", "inside",
)


# Common conjunctions (coordinating)
DEFAULT_CONJUNCTIONS: tuple[str, ...] = (
    "and", "but", "or", "so", "yet", "nor", "for",
)


# Subordinating conjunctions
DEFAULT_SUBORDINATORS: tuple[str, ...] = (
    "after", "although", "as", "because", "before", "if", "once", "since",
    "than", "that", "though", "unless", "until", "when", "whenever", "where",
    "wherever", "while", "whereas",
)


# Common interjections
DEFAULT_INTERJECTIONS: tuple[str, ...] = (
    "oh", "ah", "well", "wow", "hey", "alas", "indeed", "certainly", "surely",
    "naturally", "clearly", "obviously", "honestly", "frankly", "fortunately",
    "unfortunately", "surprisingly", "interestingly",
)


# Determiners
DEFAULT_DETERMINERS: tuple[str, ...] = (
    "the", "a", "an", "this", "that", "these", "those",
    "my", "your", "his", "her", "its", "our", "their",
    "some", "any", "no", "every", "each", "all", "both", "few", "many", "several",
    "most", "other", "another", "such", "what", "which",
)


# Subject pronouns
DEFAULT_SUBJECT_PRONOUNS: tuple[str, ...] = (
    "I", "you", "he", "she", "it", "we", "they",
)


# Object pronouns
DEFAULT_OBJECT_PRONOUNS: tuple[str, ...] = (
    "me", "you", "him", "her", "it", "us", "them",
)


# Possessive determiners
DEFAULT_POSSESSIVE_DETERMINERS: tuple[str, ...] = (
    "my", "your", "his", "her", "its", "our", "their",
)


# Modal verbs
DEFAULT_MODALS: tuple[str, ...] = (
    "can", "could", "may", "might", "must", "shall", "should", "will", "would",
)


# Relative pronouns
DEFAULT_RELATIVES: tuple[str, ...] = (
    "who", "whom", "whose", "which", "that",
)


# Transition words/phrases
DEFAULT_TRANSITIONS: tuple[str, ...] = (
    "however", "therefore", "moreover", "furthermore", "meanwhile",
    "consequently", "nevertheless", "otherwise", "accordingly", "indeed",
    "certainly", "naturally", "fortunately", "unfortunately", "surprisingly",
    "generally", "specifically", "particularly", "additionally", "similarly",
    "conversely", "alternatively", "subsequently", "ultimately", "eventually",
)


# Question words
DEFAULT_QUESTION_WORDS: tuple[str, ...] = (
    "what", "which", "who", "whom", "whose", "where", "when", "why", "how",
)


# Auxiliary verbs
DEFAULT_AUXILIARIES: tuple[str, ...] = (
    "be", "have", "do", "will", "would", "shall", "should", "may", "might",
    "can", "could", "must",
)

DEFAULT_WORDS_BY_POS: dict[PartOfSpeech, tuple[str, ...]] = {
    PartOfSpeech.NOUN: DEFAULT_NOUNS,
    PartOfSpeech.VERB: DEFAULT_VERBS,
    PartOfSpeech.ADJ: DEFAULT_ADJECTIVES,
    PartOfSpeech.ADV: DEFAULT_ADVERBS,
    PartOfSpeech.PREP: DEFAULT_PREPOSITIONS,
    PartOfSpeech.CONJ: DEFAULT_CONJUNCTIONS,
    PartOfSpeech.INTJ: DEFAULT_INTERJECTIONS,
    PartOfSpeech.DET: DEFAULT_DETERMINERS,
}

# Closed-class lists seeded into GeneratorConfig
CONFIG_DETERMINERS: tuple[str, ...] = (
    "the", "a", "an", "this", "that", "these", "those", "my", "your", "his", "her",
    "its", "our", "their", "some", "any", "no", "every", "each", "all", "both",
    "few", "many", "several",
)

CONFIG_SUBORDINATORS: tuple[str, ...] = (
    "after", "although", "as", "because", "before", "if", "once", "since", "than",
    "that", "though", "unless", "until", "when", "whenever", "where", "wherever",
    "while",
)

CONFIG_COORDINATORS: tuple[str, ...] = ("and", "but", "or", "nor", "for", "yet", "so")

CONFIG_TRANSITIONS: tuple[str, ...] = (
    "however", "therefore", "moreover", "furthermore", "meanwhile", "consequently",
    "nevertheless", "otherwise", "accordingly", "indeed", "certainly", "naturally",
    "fortunately", "unfortunately", "surprisingly", "generally", "specifically",
    "particularly",
)

CONFIG_INTERJECTIONS: tuple[str, ...] = (
    "oh", "ah", "well", "wow", "hey", "alas", "indeed", "certainly", "surely",
    "naturally",
)
