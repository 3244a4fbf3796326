"""Random-walk locomotion shared by urchins and harvesters.

Both agent types move the same way: a bounded random walk with momentum
inside the world rectangle, bouncing elastically off its edges.
"""

from __future__ import annotations

import random
from typing import Protocol

from reef.config.urchins import MAX_SPEED_FACTOR, VELOCITY_PERTURBATION
from reef.math_utils import clamp, limit_velocity


class MobileAgent(Protocol):
    """Anything with a position and a velocity."""

    x: float
    y: float
    vx: float
    vy: float


def random_walk(
    agent: MobileAgent,
    speed: float,
    rng: random.Random,
    width: float,
    height: float,
) -> None:
    """Move an agent one tick.

    Each velocity axis is nudged by ``(u - 0.5) * speed * 0.1``, the velocity
    is clamped to ``2 * speed``, then the position advances. An agent leaving
    the rectangle has that velocity axis negated and its position clamped
    back onto the edge.
    """
    agent.vx += (rng.random() - 0.5) * speed * VELOCITY_PERTURBATION
    agent.vy += (rng.random() - 0.5) * speed * VELOCITY_PERTURBATION

    agent.vx, agent.vy = limit_velocity(agent.vx, agent.vy, speed * MAX_SPEED_FACTOR)

    agent.x += agent.vx
    agent.y += agent.vy

    if agent.x < 0 or agent.x > width:
        agent.vx *= -1
        agent.x = clamp(agent.x, 0, width)
    if agent.y < 0 or agent.y > height:
        agent.vy *= -1
        agent.y = clamp(agent.y, 0, height)


def initial_velocity(speed: float, rng: random.Random) -> tuple:
    """Random starting velocity, each axis in [-speed/2, speed/2)."""
    return (rng.random() - 0.5) * speed, (rng.random() - 0.5) * speed
