"""
Convergence criteria for the partitioning engine.

Lloyd iterations stop on either of two rules:
- Fraction of points that changed group falls below a threshold
- Iteration count reaches a hard cap
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on fraction of points that change groups.

    Expects `n_changed` and `n_points` in the state passed to `check`.
    """

    def __init__(self, min_change_fraction: float = 0.01,
                 patience: int = 1):
        """
        Args:
            min_change_fraction: Fraction of changed points below which the
                partition counts as stable
            patience: Number of consecutive stable iterations required
        """
        super().__init__()
        self.min_change_fraction = min_change_fraction
        self.patience = patience
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        n_changed = current_state['n_changed']
        n_total = current_state['n_points']
        change_fraction = n_changed / n_total

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })

        if change_fraction < self.min_change_fraction:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False

        return converged

    def reset(self):
        super().reset()
        self._stable_count = 0


class MaxIterations(ConvergenceCriterion):
    """Stops once `max_iter` iterations have run."""

    def __init__(self, max_iter: int = 96):
        super().__init__()
        self.max_iter = max_iter

    def check(self, current_state: Dict[str, Any]) -> bool:
        # iterations are 0-based
        iteration = current_state['iteration']
        reached = iteration + 1 >= self.max_iter
        self.history.append({'iteration': iteration, 'reached': reached})
        return reached


class CombinedCriterion(ConvergenceCriterion):
    """Stops as soon as any of several criteria does."""

    def __init__(self, criteria: list[ConvergenceCriterion]):
        """
        Args:
            criteria: List of convergence criteria
        """
        super().__init__()
        self.criteria = criteria

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check all criteria and combine results."""
        # Evaluate every criterion so each keeps a complete history
        results = [criterion.check(current_state) for criterion in self.criteria]
        converged = any(results)

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'individual_results': results,
            'converged': converged
        })

        return converged

    def reset(self):
        """Reset all sub-criteria."""
        super().reset()
        for criterion in self.criteria:
            criterion.reset()
