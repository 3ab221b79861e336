# slotbot/handlers/user/router.py
from aiogram import Router

from slotbot.handlers.user.spin import router as spin_router
from slotbot.handlers.user.state import router as state_router
from slotbot.handlers.user.leaderboard import router as leaderboard_router


router = Router(name="user")

router.include_router(spin_router)
router.include_router(state_router)
router.include_router(leaderboard_router)
