"""The asset lifecycle transition table.

One table is the single source of truth for both the mutator
(``AssetLifecycleManager.request_transition``) and the read side
(``get_valid_next_states``).  Each edge also names the side effects the
lifecycle manager must apply when the edge is taken.
"""

from __future__ import annotations

from enum import Enum

from itam.domain.exceptions import ValidationError
from itam.domain.model.asset import AssetStatus


class SideEffect(Enum):
    RELEASE_OWNER = "RELEASE_OWNER"  # clear owner_id in the same write
    NOTIFY_OWNER = "NOTIFY_OWNER"


_S = AssetStatus
_DEFAULT_EDGES: dict[tuple[AssetStatus, AssetStatus], frozenset[SideEffect]] = {
    (_S.EXPECTED, _S.RECEIVED): frozenset(),
    (_S.RECEIVED, _S.STAGED): frozenset(),
    (_S.STAGED, _S.IN_SERVICE): frozenset(),
    (_S.IN_SERVICE, _S.REPAIR): frozenset({SideEffect.NOTIFY_OWNER}),
    (_S.REPAIR, _S.IN_SERVICE): frozenset({SideEffect.NOTIFY_OWNER}),
    (_S.REPAIR, _S.RETIRED): frozenset(
        {SideEffect.RELEASE_OWNER, SideEffect.NOTIFY_OWNER}
    ),
    (_S.IN_SERVICE, _S.RETIRED): frozenset(
        {SideEffect.RELEASE_OWNER, SideEffect.NOTIFY_OWNER}
    ),
    (_S.RETIRED, _S.DISPOSED): frozenset(),
}


class TransitionTable:
    """Immutable map of legal ``(from, to)`` edges and their side effects."""

    def __init__(
        self,
        edges: dict[tuple[AssetStatus, AssetStatus], frozenset[SideEffect] | set[SideEffect]],
        initial: AssetStatus = AssetStatus.EXPECTED,
    ) -> None:
        for source, target in edges:
            if source == target:
                raise ValidationError(
                    f"Self-transition {source.value} -> {target.value} cannot "
                    f"be an edge; repeating a status is always a no-op"
                )
        self._edges = {edge: frozenset(effects) for edge, effects in edges.items()}
        self._initial = initial

    @classmethod
    def default(cls) -> TransitionTable:
        return cls(_DEFAULT_EDGES)

    @property
    def initial(self) -> AssetStatus:
        return self._initial

    def is_legal(self, source: AssetStatus, target: AssetStatus) -> bool:
        return (source, target) in self._edges

    def next_states(self, source: AssetStatus) -> frozenset[AssetStatus]:
        return frozenset(t for (s, t) in self._edges if s == source)

    def side_effects(self, source: AssetStatus, target: AssetStatus) -> frozenset[SideEffect]:
        """Return the side effects of an edge; raises ValidationError if illegal."""
        try:
            return self._edges[(source, target)]
        except KeyError:
            raise ValidationError(
                f"{source.value} -> {target.value} is not a lifecycle edge"
            ) from None

    def terminal_states(self) -> frozenset[AssetStatus]:
        """Statuses with no outgoing edge."""
        sources = {s for (s, _) in self._edges}
        return frozenset(s for s in AssetStatus if s not in sources)
