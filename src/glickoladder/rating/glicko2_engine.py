# src/glickoladder/rating/glicko2_engine.py

"""
A from-scratch implementation of the Glicko-2 rating system.
The formulas and steps are based on the paper by Dr. Mark Glickman:
https://www.glicko.net/glicko/glicko2.pdf

The engine is purely functional: it takes a player's current rating triple
and the results of one rating period and returns a new triple. It holds no
reference to any player store.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from glickoladder.config import RatingSettings, get_settings
from glickoladder.exceptions import VolatilityConvergenceError
from glickoladder.rating.scale import from_internal_scale, to_internal_scale

logger = logging.getLogger(__name__)


# ===============================================
# == Rating Values
# ===============================================


@dataclass(frozen=True)
class Glicko2Rating:
    """A player's rating triple on the public Glicko scale."""

    rating: float = 1500.0
    rd: float = 350.0
    volatility: float = 0.06


@dataclass(frozen=True)
class MatchResult:
    """The outcome of one game against one opponent.

    ``score`` is 1 for a win, 0.5 for a draw and 0 for a loss. The opponent
    values are a snapshot taken at the time of the match.
    """

    opponent_rating: float
    opponent_rd: float
    score: float


class VolatilitySolution(NamedTuple):
    """The result of one volatility solve.

    ``lower`` and ``upper`` are the final bracket around ``ln(sigma'^2)``.
    """

    volatility: float
    iterations: int
    lower: float
    upper: float


class _OpponentTerms(NamedTuple):
    g: float
    expected: float
    score: float


# ===============================================
# == Glicko-2 Core Implementation
# ===============================================


def volatility_objective(
    x: float, delta: float, phi: float, v: float, sigma: float, tau: float
) -> float:
    """The function whose root is ``ln(sigma'^2)`` (Step 5.1 in the paper)."""
    a = math.log(sigma**2)
    ex = math.exp(x)
    phi_sq = phi**2
    return ex * (delta**2 - phi_sq - v - ex) / (2 * (phi_sq + v + ex) ** 2) - (
        x - a
    ) / tau**2


class Glicko2Engine:
    """Encapsulates the Glicko-2 calculation logic."""

    # The system constant, tau, constrains the change in volatility over time.
    # A typical value is between 0.3 and 1.2.
    def __init__(
        self,
        tau: float = 0.5,
        epsilon: float = 0.000001,
        max_iterations: int = 100,
    ):
        self._tau = tau
        self._epsilon = epsilon
        self._max_iterations = max_iterations

    @classmethod
    def from_settings(cls, settings: RatingSettings) -> "Glicko2Engine":
        return cls(
            tau=settings.tau,
            epsilon=settings.epsilon,
            max_iterations=settings.max_iterations,
        )

    @property
    def tau(self) -> float:
        return self._tau

    def update_rating(
        self, player: Glicko2Rating, results: Sequence[MatchResult]
    ) -> Glicko2Rating:
        """
        Calculates a player's new rating from the results of one rating period.

        An empty ``results`` carries no information and returns ``player``
        unchanged.
        """
        if not results:
            return player

        # Step 1 & 2: Convert to Glicko-2 scale
        mu, phi = to_internal_scale(player.rating, player.rd)
        opponents = [self._opponent_terms(mu, result) for result in results]

        # Step 3: Compute the estimated variance of the player's rating
        v = self._compute_v(opponents)
        if v == 0:
            # Every expected score rounded to 0 or 1: the games carry no
            # information, so only RD changes (Step 6 with no games played)
            phi_star = math.sqrt(phi**2 + player.volatility**2)
            _, new_rd = from_internal_scale(mu, phi_star)
            return Glicko2Rating(
                rating=player.rating, rd=new_rd, volatility=player.volatility
            )

        # Step 4: Compute the estimated improvement in rating
        improvement = self._sum_improvement(opponents)
        delta = v * improvement

        # Step 5: Determine the new volatility
        sigma_prime = self.solve_volatility(delta, phi, v, player.volatility)

        # Step 6: Update the rating deviation to the new pre-rating period value
        phi_star = math.sqrt(phi**2 + sigma_prime**2)

        # Step 7: Update the rating and rating deviation
        phi_prime = 1 / math.sqrt(1 / phi_star**2 + 1 / v)
        mu_prime = mu + phi_prime**2 * improvement

        # Step 8: Convert back to the original Glicko scale
        new_rating, new_rd = from_internal_scale(mu_prime, phi_prime)

        return Glicko2Rating(
            rating=_round_rating(new_rating), rd=new_rd, volatility=sigma_prime
        )

    def _g(self, phi: float) -> float:
        """The g() function from the Glickman paper."""
        return 1 / math.sqrt(1 + 3 * phi**2 / math.pi**2)

    def _E(self, mu: float, mu_j: float, phi_j: float) -> float:
        """The E() function, expected outcome against one opponent."""
        z = self._g(phi_j) * (mu - mu_j)
        if z >= 0:
            return 1 / (1 + math.exp(-z))
        # Same logistic, written so exp() cannot overflow for large gaps
        ez = math.exp(z)
        return ez / (1 + ez)

    def _opponent_terms(self, mu: float, result: MatchResult) -> _OpponentTerms:
        mu_j, phi_j = to_internal_scale(result.opponent_rating, result.opponent_rd)
        return _OpponentTerms(
            g=self._g(phi_j), expected=self._E(mu, mu_j, phi_j), score=result.score
        )

    def _compute_v(self, opponents: list[_OpponentTerms]) -> float:
        """Computes the estimated variance `v`."""
        v_inv = sum(o.g**2 * o.expected * (1 - o.expected) for o in opponents)
        return 1 / v_inv if v_inv != 0 else 0

    def _sum_improvement(self, opponents: list[_OpponentTerms]) -> float:
        """The sum shared by the `delta` and `mu'` calculations."""
        return sum(o.g * (o.score - o.expected) for o in opponents)

    def solve_volatility(
        self, delta: float, phi: float, v: float, sigma: float
    ) -> float:
        """Determines the new volatility `sigma'`."""
        return self.solve_volatility_detailed(delta, phi, v, sigma).volatility

    def solve_volatility_detailed(
        self, delta: float, phi: float, v: float, sigma: float
    ) -> VolatilitySolution:
        """
        Determines the new volatility `sigma'` using the Illinois variant of
        regula falsi. This is the most complex step of the Glicko-2 calculation.

        Raises:
            VolatilityConvergenceError: If the bracket has not narrowed to
                epsilon within ``max_iterations`` steps.
        """
        a = math.log(sigma**2)
        tau = self._tau

        def f(x: float) -> float:
            return volatility_objective(x, delta, phi, v, sigma, tau)

        # Bracket the root: f(A) and f(B) must have opposite signs
        A = a
        if delta**2 > phi**2 + v:
            B = math.log(delta**2 - phi**2 - v)
        else:
            k = 1
            while f(a - k * tau) < 0:
                k += 1
            B = a - k * tau

        f_A = f(A)
        f_B = f(B)
        iterations = 0

        while abs(B - A) > self._epsilon:
            iterations += 1
            if iterations > self._max_iterations:
                raise VolatilityConvergenceError(
                    self._max_iterations,
                    details={"delta": delta, "phi": phi, "v": v, "sigma": sigma},
                )
            C = A + (A - B) * f_A / (f_B - f_A)
            f_C = f(C)
            if f_C * f_B <= 0:
                A = B
                f_A = f_B
            else:
                # Illinois correction: keep the stale endpoint from stalling
                f_A /= 2
            B = C
            f_B = f_C

        logger.debug(
            "Volatility solver converged",
            extra={"iterations": iterations, "delta": delta, "v": v},
        )
        return VolatilitySolution(
            volatility=math.exp(A / 2),
            iterations=iterations,
            lower=min(A, B),
            upper=max(A, B),
        )


def _round_rating(rating: float) -> float:
    # Ratings are kept as whole numbers for display; non-finite values pass through
    return round(rating) if math.isfinite(rating) else rating


def update_rating(
    player: Glicko2Rating,
    results: Sequence[MatchResult],
    engine: Glicko2Engine | None = None,
) -> Glicko2Rating:
    """Rate ``player`` against ``results`` with the configured default engine."""
    if engine is None:
        engine = Glicko2Engine.from_settings(get_settings())
    return engine.update_rating(player, results)
