"""Word provider: lexicon first, then default tables, then the word source."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext
from blathr.core.enums import PartOfSpeech
from blathr.core.errors import NoTermFoundError
from blathr.core.lexicon.models import ChoiceEvent, LexicalItem, TermQuery
from blathr.core.lexicon.store import LexiconStore
from blathr.core.rng import RngProtocol
from blathr.core.words import WordSource
from blathr.core.words.defaults import DEFAULT_WORDS_BY_POS

logger = logging.getLogger(__name__)


class WordProvider:
    """Resolves part-of-speech requests to words.

    Lookup order: lexicon sampler, curated default table (minus exclusions),
    then the injected word source. Lexicon hits are recorded and correlated
    by the store; fallback words are recorded here as non-lexicon choices.
    Closed-class words (pronouns, modals, ...) come straight from the
    configuration lists and are not recorded.
    """

    def __init__(
        self,
        lexicon_store: LexiconStore,
        word_source: WordSource,
        rng: RngProtocol,
        config: GeneratorConfig,
    ) -> None:
        self._store = lexicon_store
        self._source = word_source
        self._rng = rng
        self.config = config

    def _source_method(self, pos: PartOfSpeech) -> Callable[[], str]:
        return {
            PartOfSpeech.NOUN: self._source.noun,
            PartOfSpeech.VERB: self._source.verb,
            PartOfSpeech.ADJ: self._source.adjective,
            PartOfSpeech.ADV: self._source.adverb,
            PartOfSpeech.PREP: self._source.preposition,
            PartOfSpeech.CONJ: self._source.conjunction,
            PartOfSpeech.INTJ: self._source.interjection,
            PartOfSpeech.DET: self._source.determiner,
        }[pos]

    def get_word(
        self,
        pos: PartOfSpeech,
        ctx: GenerationContext,
        *,
        tags: Iterable[str] = (),
        term_set_ids: Iterable[str] = (),
        features: Mapping[str, Any] | None = None,
        exclude: Iterable[str] = (),
        allow_fallback: bool = True,
    ) -> LexicalItem:
        """Resolve one word for a part of speech.

        Args:
            pos: Requested part of speech.
            ctx: Generation context.
            tags: Restrict lexicon sets to those carrying one of these tags.
            term_set_ids: Restrict lexicon sampling to these sets.
            features: Required term features.
            exclude: Values that must not be returned.
            allow_fallback: Use default tables / word source when the lexicon misses.

        Returns:
            The chosen LexicalItem.

        Raises:
            NoTermFoundError: If the lexicon has no match and fallback is disallowed.
        """
        query = TermQuery(
            pos=pos,
            tags=tuple(tags),
            term_set_ids=tuple(term_set_ids),
            features=dict(features or {}),
            exclude=tuple(exclude),
            allow_fallback=allow_fallback,
        )

        item = self._store.sample_term(query, ctx)
        if item is not None:
            for relation in self._store.evaluate_relations(item.value):
                ctx.relation_hints.append(relation.term)
            return item

        if not allow_fallback:
            raise NoTermFoundError(pos.value)

        item = LexicalItem(value=self._fallback_word(pos, query.exclude), pos=pos)
        ctx.record_choice(ChoiceEvent.for_term(item, ctx.current_scope))
        return item

    def _fallback_word(self, pos: PartOfSpeech, exclude: tuple[str, ...]) -> str:
        excluded = set(exclude)
        candidates = [word for word in DEFAULT_WORDS_BY_POS.get(pos, ()) if word not in excluded]
        if candidates:
            return self._rng.pick(candidates)
        logger.debug("Default %s table exhausted, using word source", pos.value)
        return self._source_method(pos)()

    # Open-class accessors

    def get_noun(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.NOUN, ctx, **kwargs)

    def get_verb(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.VERB, ctx, **kwargs)

    def get_adjective(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.ADJ, ctx, **kwargs)

    def get_adverb(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.ADV, ctx, **kwargs)

    def get_preposition(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.PREP, ctx, **kwargs)

    def get_conjunction(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.CONJ, ctx, **kwargs)

    def get_interjection(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.INTJ, ctx, **kwargs)

    def get_determiner(self, ctx: GenerationContext, **kwargs: Any) -> LexicalItem:
        return self.get_word(PartOfSpeech.DET, ctx, **kwargs)

    def get_related_noun(self, ctx: GenerationContext) -> LexicalItem:
        """Prefer a noun hinted by an earlier relation, else sample normally.

        Hints are consumed in order; a hint is used only if it names a term
        in one of the lexicon's noun sets.
        """
        while ctx.relation_hints:
            hint = ctx.relation_hints.pop(0)
            for set_id, term_set in self._store.get_term_sets_by_pos(PartOfSpeech.NOUN):
                for term in term_set.terms:
                    if term.value == hint:
                        item = LexicalItem(
                            value=term.value,
                            pos=PartOfSpeech.NOUN,
                            term_set_id=set_id,
                            features=term.features,
                            tags=tuple(term.tags or term_set.tags),
                        )
                        event = ChoiceEvent.for_term(item, ctx.current_scope)
                        ctx.record_choice(event)
                        self._store.apply_correlations(ctx, event)
                        return item
        return self.get_noun(ctx)

    # Closed-class words from configuration

    def get_subject_pronoun(self) -> str:
        return self._rng.pick(self.config.subject_pronouns)

    def get_object_pronoun(self) -> str:
        return self._rng.pick(self.config.object_pronouns)

    def get_modal(self) -> str:
        return self._rng.pick(self.config.modals)

    def get_subordinator(self) -> str:
        return self._rng.pick(self.config.subordinators)

    def get_relative_pronoun(self) -> str:
        return self._rng.pick(self.config.relatives)

    def get_coordinator(self) -> str:
        return self._rng.pick(self.config.coordinators)

    def get_transition(self) -> str:
        return self._rng.pick(self.config.transitions)

    def get_interjection_word(self) -> str:
        return self._rng.pick(self.config.interjections)
