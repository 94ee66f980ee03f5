"""A self-playing pong game: model, actions and reducer."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Union

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
PADDING = 20
BORDER = 4
BALL_R = 4
BALL_INIT_V = complex(0.2, 0.2)
BALL_A = 1.1
PADDLE_WIDTH = 100
PADDLE_HEIGHT = 10
PADDLE_Y = WINDOW_HEIGHT - 2 * PADDING - PADDLE_HEIGHT
PADDLE_SENS = 0.5

BOUNCE_ANIM_SPEED = 0.002
DEATH_ANIM_SPEED = 0.001

_EPSILON = 0.00000001


@dataclass(frozen=True)
class Model:
    score: int = 0
    max_score: int = 0
    ball: complex = complex(WINDOW_WIDTH // 2, PADDING * 2)
    ball_v: complex = BALL_INIT_V
    paddle_x: float = float(WINDOW_WIDTH // 2 - PADDLE_WIDTH // 2)
    death_anim: float = 0.0
    bounce_anim: float = 0.0


@dataclass(frozen=True)
class PaddleMoveAction:
    delta: float


@dataclass(frozen=True)
class TickAction:
    delta: float


Action = Union[PaddleMoveAction, TickAction]


def dot(a: complex, b: complex) -> float:
    """Dot product of two points seen as vectors."""
    return (a.conjugate() * b).real


def segment_squared_distance(
    l1p1: complex, l1p2: complex, l2p1: complex, l2p2: complex
) -> float:
    """Squared shortest distance between two line segments."""
    u = l1p2 - l1p1
    v = l2p2 - l2p1
    w = l1p1 - l2p1
    a, b, c, d, e = dot(u, u), dot(u, v), dot(v, v), dot(u, w), dot(v, w)
    big_d = a * c - b * b
    s_d = t_d = big_d
    if big_d < _EPSILON:
        s_n, s_d = 0.0, 1.0
        t_n, t_d = e, c
    else:
        s_n = b * e - c * d
        t_n = a * e - b * d
        if s_n < 0.0:
            s_n = 0.0
            t_n, t_d = e, c
        elif s_n > s_d:
            s_n = s_d
            t_n, t_d = e + b, c
    if t_n < 0.0:
        t_n = 0.0
        if -d < 0.0:
            s_n = 0.0
        elif -d > a:
            s_n = s_d
        else:
            s_n, s_d = -d, a
    elif t_n > t_d:
        t_n = t_d
        if -d + b < 0.0:
            s_n = 0.0
        elif -d + b > a:
            s_n = s_d
        else:
            s_n, s_d = -d + b, a
    sc = 0.0 if abs(s_n) < _EPSILON else s_n / s_d
    tc = 0.0 if abs(t_n) < _EPSILON else t_n / t_d
    dp = w + u * sc - v * tc
    return dp.real * dp.real + dp.imag * dp.imag


def _tick(g: Model, delta: float) -> Model:
    ball = g.ball + g.ball_v * delta
    death_anim = max(0.0, g.death_anim - delta * DEATH_ANIM_SPEED)
    bounce_anim = max(0.0, g.bounce_anim - delta * BOUNCE_ANIM_SPEED)
    v = g.ball_v
    if (v.real < 0 and ball.real - BALL_R <= PADDING) or (
        v.real > 0 and ball.real + BALL_R >= WINDOW_WIDTH - PADDING
    ):
        v = complex(-v.real, v.imag)
    if v.imag < 0 and ball.imag - BALL_R <= PADDING:
        v = complex(v.real, -v.imag)
    g = replace(g, ball_v=v, death_anim=death_anim, bounce_anim=bounce_anim)

    paddle_left = complex(g.paddle_x - BALL_R, PADDLE_Y)
    paddle_right = complex(g.paddle_x + PADDLE_WIDTH + BALL_R, PADDLE_Y)
    if v.imag > 0 and BALL_R * BALL_R > segment_squared_distance(
        g.ball, ball, paddle_left, paddle_right
    ):
        return replace(
            g,
            ball_v=complex(v.real, -v.imag) * BALL_A,
            score=g.score + 1,
            bounce_anim=1.0,
        )
    if v.imag > 0 and ball.imag - BALL_R >= WINDOW_HEIGHT - PADDING:
        return replace(
            g,
            max_score=max(g.max_score, g.score),
            score=0,
            ball_v=BALL_INIT_V,
            ball=complex(
                PADDING + random.random() * (WINDOW_WIDTH - PADDING * 4),
                PADDING * 2,
            ),
            death_anim=1.0,
        )
    return replace(g, ball=ball)


def update(model: Model, action: Action) -> Model:
    """Apply a paddle move or a time tick to the game."""
    match action:
        case PaddleMoveAction(delta=delta):
            paddle_x = max(
                0.0,
                min(float(WINDOW_WIDTH - PADDLE_WIDTH), model.paddle_x + delta * PADDLE_SENS),
            )
            return replace(model, paddle_x=paddle_x)
        case TickAction(delta=delta):
            return _tick(model, delta)
    raise TypeError(f"unknown autopong action: {action!r}")