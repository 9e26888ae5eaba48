"""
Application context.

Everything a request handler needs that outlives a single request is built
once in create_app() and attached to app.state.context.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from task_management.core.config import Settings
from task_management.core.jwt import JWTService
from task_management.db.session import build_engine, build_session_maker


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    jwt_service: JWTService

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_maker=build_session_maker(engine),
            jwt_service=JWTService.from_settings(settings),
        )

    async def close(self) -> None:
        await self.engine.dispose()
