"""Retreat motion component.

Displacement an actor travels when the party escapes from battle. The same
motion is applied to every member.
"""

from dataclasses import dataclass

from party_formation.types import FrameCount, Number


@dataclass(frozen=True)
class RetreatMotion:
    """Movement started on a successful escape.

    Attributes:
        dx: Horizontal displacement in pixels.
        dy: Vertical displacement in pixels.
        duration: Number of frames the movement runs for.
    """

    dx: Number
    dy: Number
    duration: FrameCount
