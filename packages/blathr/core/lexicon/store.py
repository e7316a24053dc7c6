"""Lexicon store: lookups, weighted sampling and correlation propagation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blathr.core.enums import PartOfSpeech, RelationDirection
from blathr.core.lexicon.models import (
    Archetype,
    ChoiceEvent,
    DistributionEntry,
    LexicalItem,
    Lexicon,
    Pattern,
    PatternQuery,
    RelationResult,
    Term,
    TermQuery,
    TermSet,
)
from blathr.core.rng import RngProtocol, WeightedItem

if TYPE_CHECKING:
    from blathr.core.context import GenerationContext

logger = logging.getLogger(__name__)

TERM_SET_BIAS_DISTRIBUTION = "termSetBias"
SENTENCE_TYPES_DISTRIBUTION = "sentenceTypes"

# Extra weight for a term set sharing an active tag
ACTIVE_TAG_BOOST = 2.0


def pattern_bias_key(pattern_id: str) -> str:
    """Bias-table key for a pattern."""
    return f"pattern:{pattern_id}"


class LexiconStore:
    """Read-only lexicon holder plus the weighted term and pattern sampler.

    The lexicon itself is never mutated; set_lexicon() replaces it whole.

    Example:
        >>> store = LexiconStore(SeedableRng(1), lexicon)
        >>> item = store.sample_term(TermQuery(pos=PartOfSpeech.NOUN), ctx)
    """

    def __init__(self, rng: RngProtocol, lexicon: Lexicon | None = None) -> None:
        self._rng = rng
        self._lexicon = lexicon

    # Lookups

    def set_lexicon(self, lexicon: Lexicon | None) -> None:
        """Replace the lexicon (None unloads it)."""
        self._lexicon = lexicon
        if lexicon is not None:
            logger.debug(
                "Lexicon %s loaded: %d term sets, %d correlations",
                lexicon.id,
                len(lexicon.term_sets),
                len(lexicon.correlations),
            )

    @property
    def lexicon(self) -> Lexicon | None:
        return self._lexicon

    def is_loaded(self) -> bool:
        return self._lexicon is not None

    def get_term_set(self, term_set_id: str) -> TermSet | None:
        if self._lexicon is None:
            return None
        return self._lexicon.term_sets.get(term_set_id)

    def get_term_sets_by_pos(self, pos: PartOfSpeech) -> list[tuple[str, TermSet]]:
        """Return (id, set) pairs for every term set with the given POS, in document order."""
        if self._lexicon is None:
            return []
        return [(set_id, ts) for set_id, ts in self._lexicon.term_sets.items() if ts.pos == pos]

    def get_archetype(self, name: str) -> Archetype | None:
        if self._lexicon is None:
            return None
        return self._lexicon.archetypes.get(name)

    def get_distribution(self, distribution_id: str) -> list[DistributionEntry] | None:
        if self._lexicon is None:
            return None
        return self._lexicon.distributions.get(distribution_id)

    def get_archetype_distribution(
        self, archetype_name: str, role: str
    ) -> list[DistributionEntry] | None:
        """Resolve an archetype's distribution reference for a role (e.g. termSetBias)."""
        archetype = self.get_archetype(archetype_name)
        if archetype is None:
            return None
        distribution_id = archetype.distributions.get(role)
        if distribution_id is None:
            return None
        return self.get_distribution(distribution_id)

    # Term sampling

    def _candidate_sets(self, query: TermQuery, ctx: GenerationContext) -> list[tuple[str, TermSet]]:
        if self._lexicon is None:
            return []

        if query.term_set_ids:
            candidates = []
            for set_id in query.term_set_ids:
                ts = self._lexicon.term_sets.get(set_id)
                if ts is not None and ts.pos == query.pos:
                    candidates.append((set_id, ts))
            return candidates

        candidates = self.get_term_sets_by_pos(query.pos)
        if query.tags:
            wanted = set(query.tags)
            return [(set_id, ts) for set_id, ts in candidates if wanted.intersection(ts.tags)]
        return candidates

    def _set_weight(self, set_id: str, term_set: TermSet, ctx: GenerationContext) -> float:
        """Additive set weight, clamped at zero."""
        weight = 1.0
        distribution = self.get_archetype_distribution(ctx.archetype, TERM_SET_BIAS_DISTRIBUTION)
        if distribution:
            for entry in distribution:
                if entry.key == set_id:
                    weight += entry.weight
                    break
        if ctx.active_tags.intersection(term_set.tags):
            weight += ACTIVE_TAG_BOOST
        weight += ctx.bias(set_id)
        return max(0.0, weight)

    def _filter_terms(self, term_set: TermSet, query: TermQuery) -> list[Term]:
        excluded = set(query.exclude)
        terms = []
        for term in term_set.terms:
            if term.value in excluded:
                continue
            if query.features:
                if term.features is None or not term.features.matches(query.features):
                    continue
            terms.append(term)
        return terms

    def sample_term(self, query: TermQuery, ctx: GenerationContext) -> LexicalItem | None:
        """Sample a term for a query, recording the choice and applying correlations.

        Args:
            query: POS, optional tags / explicit set ids / required features / exclusions.
            ctx: Generation context; receives the choice event and any boosts.

        Returns:
            The chosen LexicalItem, or None when no set or no term survives filtering.
        """
        candidates = self._candidate_sets(query, ctx)
        weighted_sets = [
            WeightedItem(item=(set_id, ts), weight=self._set_weight(set_id, ts, ctx))
            for set_id, ts in candidates
        ]
        weighted_sets = [entry for entry in weighted_sets if entry.weight > 0]
        if not weighted_sets:
            return None

        set_id, term_set = self._rng.weighted_pick(weighted_sets)

        terms = self._filter_terms(term_set, query)
        weighted_terms = [WeightedItem(item=term, weight=term.weight) for term in terms]
        if not any(entry.weight > 0 for entry in weighted_terms):
            logger.debug("Term set %s has no eligible %s terms", set_id, query.pos.value)
            return None

        term = self._rng.weighted_pick(weighted_terms)
        item = LexicalItem(
            value=term.value,
            pos=query.pos,
            term_set_id=set_id,
            features=term.features,
            tags=tuple(term.tags or term_set.tags),
        )

        event = ChoiceEvent.for_term(item, ctx.current_scope)
        ctx.record_choice(event)
        self.apply_correlations(ctx, event)
        return item

    # Pattern sampling

    def sample_pattern(self, query: PatternQuery, ctx: GenerationContext) -> tuple[str, Pattern] | None:
        """Sample a pattern of the requested type, weighted by pattern weight plus bias.

        Returns:
            (pattern_id, pattern), or None if nothing qualifies.
        """
        if self._lexicon is None:
            return None

        if query.pattern_ids:
            pool = [
                (pattern_id, self._lexicon.patterns[pattern_id])
                for pattern_id in query.pattern_ids
                if pattern_id in self._lexicon.patterns
            ]
        else:
            pool = list(self._lexicon.patterns.items())

        wanted = set(query.tags)
        weighted = [
            WeightedItem(
                item=(pattern_id, pattern),
                weight=max(0.0, pattern.weight + ctx.bias(pattern_bias_key(pattern_id))),
            )
            for pattern_id, pattern in pool
            if pattern.type == query.type and (not wanted or wanted.intersection(pattern.tags))
        ]
        if not any(entry.weight > 0 for entry in weighted):
            return None

        pattern_id, pattern = self._rng.weighted_pick(weighted)
        event = ChoiceEvent.for_pattern(pattern_id, pattern, ctx.current_scope)
        ctx.record_choice(event)
        self.apply_correlations(ctx, event)
        return pattern_id, pattern

    # Correlations and relations

    def apply_correlations(self, ctx: GenerationContext, event: ChoiceEvent) -> list[str]:
        """Apply every correlation triggered by a choice event.

        Each boost is added under the correlation's scope-prefixed key and
        under the bare target key.

        Returns:
            Labels of the correlations that fired.
        """
        if self._lexicon is None:
            return []

        fired: list[str] = []
        for index, correlation in enumerate(self._lexicon.correlations):
            if not correlation.when.matches(event):
                continue
            for boost in correlation.then_boost:
                if boost.term_set is not None:
                    ctx.add_bias(correlation.scope, boost.term_set, boost.weight_delta)
                if boost.pattern is not None:
                    ctx.add_bias(correlation.scope, pattern_bias_key(boost.pattern), boost.weight_delta)
            label = correlation.label(index)
            fired.append(label)
            logger.debug("Correlation %s fired on %s", label, event.value)

        ctx.applied_correlations.extend(fired)
        return fired

    def evaluate_relations(self, term: str, relation_type: str | None = None) -> list[RelationResult]:
        """Return relations touching a term, outgoing first then incoming per relation."""
        if self._lexicon is None:
            return []

        results: list[RelationResult] = []
        for relation in self._lexicon.relations:
            if relation_type is not None and relation.type != relation_type:
                continue
            if relation.from_ == term:
                results.append(
                    RelationResult(
                        term=relation.to,
                        relation_type=relation.type,
                        weight=relation.weight,
                        direction=RelationDirection.OUTGOING,
                    )
                )
            if relation.to == term:
                results.append(
                    RelationResult(
                        term=relation.from_,
                        relation_type=relation.type,
                        weight=relation.weight,
                        direction=RelationDirection.INCOMING,
                    )
                )
        return results
