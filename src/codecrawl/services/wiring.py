"""Builds the service graph from repositories, config and a run store."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from codecrawl.core import config as user_config
from codecrawl.data.repositories import (
    EnemiesRepository,
    EventTracksRepository,
    LoadoutRepository,
    RewardsRepository,
)
from codecrawl.data.run_store import JsonRunStore, RunRepository
from codecrawl.services.controllers import RunController
from codecrawl.services.game_service import GameService
from codecrawl.services.interpreter import Interpreter, Sleep
from codecrawl.services.inventory_service import InventoryService
from codecrawl.services.persistence_service import PersistenceService
from codecrawl.services.progression_service import ProgressionService
from codecrawl.services.reward_service import RewardService
from codecrawl.services.save_service import SaveService
from codecrawl.services.shop_service import ShopService
from codecrawl.services.turn_service import TurnService
from codecrawl.services.upgrade_service import UpgradeService


@dataclass(slots=True)
class GameServices:
    game: GameService
    progression: ProgressionService
    rewards: RewardService
    turns: TurnService
    shop: ShopService
    inventory: InventoryService
    upgrades: UpgradeService
    persistence: PersistenceService
    controller: RunController


def build_services(
    *,
    definitions_path: Path | str | None = None,
    store: RunRepository | None = None,
    config: Dict[str, str] | None = None,
    sleep: Sleep = asyncio.sleep,
    user_id: str | None = None,
) -> GameServices:
    """Wire every service; defaults read the bundled definitions and the user's config."""
    settings = config if config is not None else user_config.load_config()
    enemies_repo = EnemiesRepository(definitions_path)
    rewards = RewardService(rewards_repo=RewardsRepository(definitions_path))
    progression = ProgressionService(
        event_tracks_repo=EventTracksRepository(definitions_path),
        enemies_repo=enemies_repo,
        reward_service=rewards,
    )
    persistence = PersistenceService(store=store or JsonRunStore(), save_service=SaveService())
    game = GameService(
        loadout_repo=LoadoutRepository(definitions_path),
        progression_service=progression,
        persistence_service=persistence,
    )
    interpreter = Interpreter(sleep=sleep, delay_scale=user_config.pacing_scale(settings))
    turns = TurnService(reward_service=rewards, interpreter=interpreter)
    return GameServices(
        game=game,
        progression=progression,
        rewards=rewards,
        turns=turns,
        shop=ShopService(progression_service=progression),
        inventory=InventoryService(),
        upgrades=UpgradeService(progression_service=progression),
        persistence=persistence,
        controller=RunController(
            turn_service=turns,
            game_service=game,
            persistence_service=persistence,
            user_id=user_id,
        ),
    )
