"""Weighted histogram analysis method for combining biased samples."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from coffeemill.histogram import Histogram, ProbabilityDensity
from coffeemill.potential import PotentialFunction

logger = logging.getLogger(__name__)

Window = tuple[Sequence[float], PotentialFunction]


class WHAMConvergenceError(RuntimeError):
    """Raised when the WHAM iteration does not converge."""


class WHAMSolver:
    """Solves the WHAM equations for windows of reaction-coordinate samples."""

    def __init__(self, kbt: float, tolerance: float, max_iteration: int) -> None:
        self.kbt = float(kbt)
        self.beta = 1.0 / self.kbt
        self.tolerance = float(tolerance)
        self.max_iteration = int(max_iteration)

    def __call__(self, trajectories: Sequence[Window], bins: int = 100) -> ProbabilityDensity:
        """Return the unbiased probability density over all windows."""
        return self.reconstruct(self.solve_f(trajectories), trajectories, bins)

    def _boltzmann(self, potential: PotentialFunction, samples: np.ndarray) -> np.ndarray:
        return np.exp(
            -self.beta * np.array([potential.energy(float(x)) for x in samples], dtype=float)
        )

    def solve_f(self, trajectories: Sequence[Window]) -> list[float]:
        """Iterate the WHAM equations; return ``exp(f_l)`` for each window."""
        nwin = len(trajectories)
        for index, (_, potential) in enumerate(trajectories):
            if potential is None:
                raise ValueError(f"trajectory {index} does not have a potential function")

        samples = [np.asarray(traj, dtype=float) for traj, _ in trajectories]
        counts = np.array([len(s) for s in samples], dtype=float)
        # exp_w[i][l, j] = exp(-beta * V_l(x_ij))
        exp_w = [
            np.array([self._boltzmann(potential, traj_i) for _, potential in trajectories])
            .reshape(nwin, len(traj_i))
            for traj_i in samples
        ]
        logger.info("expW cached")

        expfs_prev = np.ones(nwin)
        for iteration in range(self.max_iteration):
            sums = np.zeros(nwin)
            for weights in exp_w:
                denom = (counts * expfs_prev) @ weights
                sums += (weights / denom).sum(axis=1)
            expfs = 1.0 / sums

            relative = (expfs - expfs_prev) / ((expfs + expfs_prev) * 0.5)
            max_relative_diff = max(0.0, float(relative.max())) if nwin else 0.0

            logger.info("%d-th iteration: diff = %g", iteration, max_relative_diff)
            if max_relative_diff < self.tolerance:
                logger.info("parameter converged: %s", expfs.tolist())
                return expfs.tolist()
            expfs_prev = expfs
        raise WHAMConvergenceError(
            f"WHAM does not converge after {self.max_iteration} iteration."
        )

    def reconstruct(
        self, expfs: Sequence[float], trajectories: Sequence[Window], bins: int
    ) -> ProbabilityDensity:
        """Build the unbiased density from the solved ``exp(f_l)`` values."""
        if bins < 2:
            raise ValueError(f"at least two bins are needed, got {bins}")
        all_samples = [float(x) for traj, _ in trajectories for x in traj]
        if not all_samples:
            raise ValueError("no samples to reconstruct a density from")
        low, high = min(all_samples), max(all_samples)
        dx = (high - low) / (bins - 1)
        if dx <= 0.0:
            raise ValueError("all samples have the same value; histogram range is empty")
        start, stop = low - dx * 0.5, high + dx * 0.5
        logger.info("WHAM: range = [%g, %g) dx = %g", start, stop, dx)

        counts = [len(traj) for traj, _ in trajectories]
        potentials = [potential for _, potential in trajectories]
        unbiased = Histogram(bins, start, stop)
        for x in all_samples:
            denom = sum(
                n * expf * np.exp(-1.0 * self.beta * potential.energy(x))
                for n, expf, potential in zip(counts, expfs, potentials)
            )
            unbiased.add(x, 1.0 / float(denom))
        return ProbabilityDensity(unbiased)