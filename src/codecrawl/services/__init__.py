"""Service layer exports."""

from .errors import (
    AuthenticationError,
    EditingLockedError,
    FactoryError,
    PersistenceError,
    ProgressionError,
    SaveLoadError,
    TurnInProgressError,
)
from .game_service import GameService, LoadResult
from .interpreter import Interpreter, validate
from .inventory_service import InventoryService
from .persistence_service import PersistenceService, SaveAck, SavedRun
from .progression_service import AdvanceResult, ProgressionService, editing_locked
from .reward_service import RewardService
from .save_service import SaveService
from .shop_service import ShopService
from .transpiler import Program, transpile
from .turn_service import TurnOutcome, TurnService
from .upgrade_service import UpgradeService

__all__ = [
    "AdvanceResult",
    "AuthenticationError",
    "EditingLockedError",
    "FactoryError",
    "GameService",
    "Interpreter",
    "InventoryService",
    "LoadResult",
    "PersistenceError",
    "PersistenceService",
    "Program",
    "ProgressionError",
    "ProgressionService",
    "RewardService",
    "SaveAck",
    "SaveLoadError",
    "SaveService",
    "SavedRun",
    "ShopService",
    "TurnInProgressError",
    "TurnOutcome",
    "TurnService",
    "UpgradeService",
    "editing_locked",
    "transpile",
    "validate",
]
