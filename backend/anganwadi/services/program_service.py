"""Program use cases: add, update, delete and list program records.

`ProgramService` coordinates the record store and the image host. An image
is always uploaded before the record that points at it is written; there is
no compensation if the write then fails, so a failed write can leave an
orphaned image behind on Cloudinary.
"""

from anganwadi.core.errors import NotFoundError, UpstreamError, ValidationError
from anganwadi.core.logging import logger
from anganwadi.models.programs import Program
from anganwadi.services.image_host import CloudinaryImageHost, public_id_from_url
from anganwadi.services.program_store import ProgramStore


class ProgramService:
    """Orchestrates program writes across the database and the image host.

    Attributes:
        program_store: Gateway to the `programs` table.
        image_host: Gateway to the image host.
        image_folder: Folder that program images are uploaded into.
    """

    def __init__(
        self,
        program_store: ProgramStore,
        image_host: CloudinaryImageHost,
        image_folder: str,
    ) -> None:
        self.program_store = program_store
        self.image_host = image_host
        self.image_folder = image_folder

    async def upload_image(self, image: bytes | None) -> str | None:
        """Upload ``image`` if there is one and return its public URL."""
        if not image:
            return None
        uploaded = await self.image_host.upload(image, folder=self.image_folder)
        return uploaded.url

    async def add_program(
        self,
        title: str,
        description: str,
        date: str,
        time: str,
        image: bytes | None = None,
    ) -> Program:
        """Create a program, uploading its image first when one is given.

        Raises:
            ValidationError: If any of the text fields is blank.
            UpstreamError: If the image upload fails.
            PersistenceError: If the record cannot be written.
        """
        if not all(value and value.strip() for value in (title, description, date, time)):
            raise ValidationError("Title, description, date and time are required")

        image_url = await self.upload_image(image) or ""
        return await self.program_store.create_program(
            title=title,
            description=description,
            date=date,
            time=time,
            image=image_url,
        )

    async def update_program(
        self,
        program_id: str,
        title: str,
        description: str,
        date: str,
        time: str,
        image: bytes | None = None,
    ) -> Program:
        """Replace the text fields of a program and optionally its image.

        The text fields are overwritten as given, blank values included. The
        stored image URL is kept unless a new image is supplied.

        Raises:
            NotFoundError: If no program has ``program_id``.
            UpstreamError: If the new image cannot be uploaded.
            PersistenceError: If the record cannot be read or written.
        """
        program = await self.program_store.get_program(program_id)
        if program is None:
            raise NotFoundError("Program not found")

        new_image_url = await self.upload_image(image)
        if new_image_url is not None:
            program.image = new_image_url

        program.title = title
        program.description = description
        program.date = date
        program.time = time
        if not await self.program_store.update_program(program):
            # deleted by a concurrent request after it was loaded
            raise NotFoundError("Program not found")
        return program

    async def delete_program(self, program_id: str) -> None:
        """Delete a program and, best effort, its hosted image.

        A failure to delete the image is logged and does not stop the record
        from being deleted.

        Raises:
            NotFoundError: If no program has ``program_id``.
            PersistenceError: If the record cannot be read or deleted.
        """
        program = await self.program_store.get_program(program_id)
        if program is None:
            raise NotFoundError("Program not found")

        if program.image:
            public_id = public_id_from_url(program.image, self.image_folder)
            try:
                await self.image_host.delete(public_id)
            except UpstreamError:
                logger.warning(
                    "Keeping orphaned image {} of deleted program {}", public_id, program_id
                )

        if not await self.program_store.delete_program(program_id):
            # removed by a concurrent request between the lookup and the delete
            raise NotFoundError("Program not found")

    async def list_programs(self) -> list[Program]:
        return await self.program_store.list_programs()
