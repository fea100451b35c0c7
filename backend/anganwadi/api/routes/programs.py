"""Program routes: public listing plus admin-only add, update and delete.

Admin routes require the ``adminkey`` header (see `require_admin`). Failures
of the image host or the database are logged here and answered with a fixed
message so no internal detail reaches the client.
"""

from typing import Annotated, Optional

from anganwadi.api.dependencies import get_program_service, require_admin
from anganwadi.core.errors import NotFoundError, ValidationError
from anganwadi.core.logging import logger
from anganwadi.schemas.programs import MessageResponse, ProgramResponse
from anganwadi.services.program_service import ProgramService
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

router = APIRouter(tags=["programs"])

ProgramServiceDep = Annotated[ProgramService, Depends(get_program_service)]


def server_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message}
    )


async def read_image(image: UploadFile | None) -> bytes | None:
    """Return the uploaded file's bytes, or None when no file was sent."""
    if image is None:
        return None
    try:
        return await image.read()
    finally:
        await image.close()


@router.post(
    "/add-program",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def add_program(
    program_service: ProgramServiceDep,
    title: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    time: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    """Create a program from a multipart form, with an optional image.

    Returns:
        MessageResponse: Confirmation message with status 201.
    """

    try:
        program = await program_service.add_program(
            title=title,
            description=description,
            date=date,
            time=time,
            image=await read_image(image),
        )
    except ValidationError:
        raise
    except Exception:
        logger.exception("Error adding program title={!r}", title)
        return server_error("Something went wrong")

    logger.info("Program {} added", program.id)
    return MessageResponse(message="Program Added Successfully")


@router.put(
    "/update-program/{program_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def update_program(
    program_id: str,
    program_service: ProgramServiceDep,
    title: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    time: str = Form(""),
    image: Optional[UploadFile] = File(None),
):
    """Overwrite a program's fields; the image is replaced only if a new one is sent.

    Raises:
        NotFoundError: 404 if the program does not exist.
    """

    try:
        await program_service.update_program(
            program_id,
            title=title,
            description=description,
            date=date,
            time=time,
            image=await read_image(image),
        )
    except NotFoundError:
        logger.warning("Update requested for unknown program id={}", program_id)
        raise
    except Exception:
        logger.exception("Error updating program id={}", program_id)
        return server_error("Update failed")

    return MessageResponse(message="Program Updated Successfully")


@router.get("/programs", response_model=list[ProgramResponse])
async def list_programs(program_service: ProgramServiceDep):
    """Return all programs, newest first. Public."""

    try:
        programs = await program_service.list_programs()
    except Exception:
        logger.exception("Error fetching programs")
        return server_error("Failed to fetch programs")

    return [ProgramResponse.from_record(program) for program in programs]


@router.delete(
    "/delete-program/{program_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_program(program_id: str, program_service: ProgramServiceDep):
    """Delete a program and, best effort, its hosted image.

    Raises:
        NotFoundError: 404 if the program does not exist.
    """

    try:
        await program_service.delete_program(program_id)
    except NotFoundError:
        logger.warning("Delete requested for unknown program id={}", program_id)
        raise
    except Exception:
        logger.exception("Error deleting program id={}", program_id)
        return server_error("Delete failed")

    return MessageResponse(message="Program Deleted Successfully")
