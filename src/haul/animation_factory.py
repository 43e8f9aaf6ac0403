from esper import World
from haul.animations import FrameAnimation, MoveAnimation
from haul.components.coin import Coin
from haul.config import BoardConfig
from haul.geometry import Point, Rect
from haul.scheduler import Completion, TickManager
from typing import Optional

class AnimationFactory:
    """Builds animations for board entities and registers them with the scheduler."""

    def __init__(self, world: World, scheduler: TickManager, config: BoardConfig):
        self.world = world
        self.scheduler = scheduler
        self.config = config

    def move(self, entity: int, destination: Point, duration: float,
             on_complete: Optional[Completion] = None) -> MoveAnimation:
        rect = self.world.component_for_entity(entity, Rect)
        anim = MoveAnimation(rect, destination, duration)
        self.scheduler.schedule(anim, on_complete)
        return anim

    def fall(self, entity: int, destination: Point, cells: int,
             on_complete: Optional[Completion] = None) -> MoveAnimation:
        # Duration grows with distance so every coin falls at the same speed.
        return self.move(entity, destination, cells * self.config.fall_duration_per_cell, on_complete)

    def spin(self, entity: int, on_complete: Optional[Completion] = None) -> FrameAnimation:
        coin = self.world.component_for_entity(entity, Coin)
        anim = FrameAnimation(coin, self.config.spin_duration, self.config.spin_frame_duration)
        self.scheduler.schedule(anim, on_complete)
        return anim
