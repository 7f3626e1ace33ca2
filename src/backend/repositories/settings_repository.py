"""Site settings repository (key/value rows)."""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.app_setting import AppSetting

logger = logging.getLogger(__name__)


class SettingsRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> dict[str, Optional[str]]:
        result = await self.db.execute(select(AppSetting))
        return {row.setting_key: row.setting_value for row in result.scalars().all()}

    async def set(self, key: str, value: Optional[str], updated_by: Optional[str] = None) -> AppSetting:
        setting = await self.db.get(AppSetting, key)
        if setting is None:
            setting = AppSetting(setting_key=key)
            self.db.add(setting)
        setting.setting_value = value
        setting.updated_by = updated_by
        setting.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        logger.info("Setting %s updated", key)
        return setting
