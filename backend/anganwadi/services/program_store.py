"""Database access for program records.

The `ProgramStore` wraps the SQLAlchemy session handling needed to create,
read, update, delete and count `Program` rows. Driver errors are logged and
re-raised as :class:`PersistenceError` so callers deal with one error type.
"""

from anganwadi.core.errors import PersistenceError
from anganwadi.core.logging import logger
from anganwadi.models.programs import Program
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class ProgramStore:
    """Manage `Program` rows in the database.

    Responsibilities:
        - Insert new programs.
        - List programs newest first and look them up by id.
        - Persist edits and deletions.
        - Provide the counts the dashboard needs.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create_program(
        self, title: str, description: str, date: str, time: str, image: str = ""
    ) -> Program:
        """Insert a program and return it with its assigned id and timestamp."""
        try:
            async with self.session_factory() as db:
                program = Program(
                    title=title,
                    description=description,
                    date=date,
                    time=time,
                    image=image,
                )
                db.add(program)
                await db.commit()
                logger.info("Created program id={} title={!r}", program.id, title)
                return program
        except SQLAlchemyError as error:
            logger.exception("Failed to create program title={!r}", title)
            raise PersistenceError("Failed to create program") from error

    async def list_programs(self) -> list[Program]:
        """Return every program ordered by creation time, newest first."""
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(Program).order_by(Program.created_at.desc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as error:
            logger.exception("Failed to list programs")
            raise PersistenceError("Failed to list programs") from error

    async def get_program(self, program_id: str) -> Program | None:
        """Return the program with ``program_id`` or None.

        Args:
            program_id: Store-assigned program identifier.

        Returns:
            The matching `Program` instance, or `None` if not found.
        """
        try:
            async with self.session_factory() as db:
                program = await db.get(Program, program_id)
        except SQLAlchemyError as error:
            logger.exception("Failed to load program id={}", program_id)
            raise PersistenceError("Failed to load program") from error

        if program is None:
            logger.debug("Program not found in DB id={}", program_id)
        return program

    async def update_program(self, program: Program) -> bool:
        """Write the editable fields of ``program`` back to its row.

        Only an existing row is updated; a program deleted since it was
        loaded stays deleted.

        Returns:
            True on success, False if the row no longer exists.
        """
        stmt = (
            update(Program)
            .where(Program.id == program.id)
            .values(
                title=program.title,
                description=program.description,
                date=program.date,
                time=program.time,
                image=program.image,
            )
        )
        try:
            async with self.session_factory() as db:
                result = await db.execute(stmt)
                await db.commit()
        except SQLAlchemyError as error:
            logger.exception("Failed to update program id={}", program.id)
            raise PersistenceError("Failed to update program") from error

        if result.rowcount == 0:
            logger.info("Program {} no longer exists, nothing updated", program.id)
            return False
        logger.info("Updated program id={}", program.id)
        return True

    async def delete_program(self, program_id: str) -> bool:
        """Remove a program record.

        Returns:
            True on success, False if the program did not exist.
        """
        try:
            async with self.session_factory() as db:
                program = await db.get(Program, program_id)
                if program is None:
                    logger.info("Program {} does not exist", program_id)
                    return False
                await db.delete(program)
                await db.commit()
        except SQLAlchemyError as error:
            logger.exception("Failed to delete program id={}", program_id)
            raise PersistenceError("Failed to delete program") from error

        logger.info("Deleted program record from DB id={}", program_id)
        return True

    async def count_programs(self) -> int:
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(func.count()).select_from(Program))
                return result.scalar_one()
        except SQLAlchemyError as error:
            logger.exception("Failed to count programs")
            raise PersistenceError("Failed to count programs") from error

    async def latest_program(self) -> Program | None:
        """Return the most recently created program, if any."""
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(Program).order_by(Program.created_at.desc()).limit(1)
                )
                return result.scalars().first()
        except SQLAlchemyError as error:
            logger.exception("Failed to load latest program")
            raise PersistenceError("Failed to load latest program") from error

    async def list_dates(self) -> list[str]:
        """Return the ``date`` column of every program."""
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(Program.date))
                return list(result.scalars().all())
        except SQLAlchemyError as error:
            logger.exception("Failed to load program dates")
            raise PersistenceError("Failed to load program dates") from error
