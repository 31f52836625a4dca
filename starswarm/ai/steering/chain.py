"""Priority chain combining the steering controllers."""
from __future__ import annotations

from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision
from .edge import EdgeAvoidance
from .stuck import StuckDetector, StuckEscape
from .follow import FollowTarget
from .wander import Wander


def default_behaviors() -> list[SteeringBehavior]:
    """Controllers in priority order, highest first."""
    return [EdgeAvoidance(), StuckEscape(), FollowTarget(), Wander()]


class SteeringChain:
    """Evaluates controllers in priority order; the first active one wins.

    Stuck bookkeeping runs before any controller, every tick. Composing
    controllers (the stuck escape) still add their delta after a
    higher-priority controller has won, since a ship is only ever held
    in place by the border clamp while edge avoidance is active.
    """

    def __init__(
        self,
        behaviors: list[SteeringBehavior] | None = None,
        detector: StuckDetector | None = None
    ) -> None:
        self.behaviors = behaviors if behaviors is not None else default_behaviors()
        self.detector = detector or StuckDetector()

    def evaluate(self, ctx: SteeringContext) -> SteeringResult:
        """Run one tick of steering for ``ctx.ship``.

        Returns:
            The winning result, with any composed deltas folded in
        """
        self.detector.update(ctx)

        winner: SteeringResult | None = None
        extra = 0.0
        composed: list[SteeringDecision] = []
        messages: list[str] = []

        for behavior in self.behaviors:
            if winner is not None and not behavior.composes:
                continue

            result = behavior.evaluate(ctx)
            if result is None:
                continue

            if result.message:
                messages.append(result.message)
            if winner is None:
                winner = result
            else:
                extra += result.heading_delta
                composed.append(result.decision)

        if winner is None:
            # Only reachable with a custom chain that has no fallback
            return SteeringResult(decision=SteeringDecision.WANDER)

        return SteeringResult(
            decision=winner.decision,
            heading_delta=winner.heading_delta + extra,
            composed=tuple(composed),
            message="; ".join(messages)
        )
