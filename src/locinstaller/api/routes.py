"""API route handlers for the installer service.

Session routes are async and run on the event loop, the same thread that
drains the update queue, so session state has a single writer.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from locinstaller.api.models import (
    ListResponse,
    PartitionListResponse,
    ProgressResponse,
    SuccessResponse,
)
from locinstaller.config import InstallerSettings, get_settings
from locinstaller.models.install_config import InstallConfig
from locinstaller.models.status import SessionState
from locinstaller.services.session_controller import SessionController
from locinstaller.services.sysinfo import LIST_KINDS, SystemInfoService

router = APIRouter(prefix="/api/v1.0")


@router.get("/progress", response_model=ProgressResponse)
async def get_progress():
    """GET /api/v1.0/progress - Query current installation status.

    Response format (success):
        {
            "code": 200,
            "msg": "success",
            "data": {
                "state": "running",
                "progress": 45,
                "status": "Copying system files... 45% 10.5MB/s",
                ...
            }
        }

    A failed session returns code 500 with the last error in msg.
    """
    controller = SessionController()
    status = controller.get_status()

    if status.state == SessionState.FAILED:
        msg = f"Installation failed: {status.error}" if status.error else "Installation failed"
        return ProgressResponse(code=500, msg=msg, data=status)
    return ProgressResponse(code=200, msg="success", data=status)


@router.post("/install", response_model=SuccessResponse)
async def post_install(
    config: InstallConfig, settings: InstallerSettings = Depends(get_settings)
):
    """POST /api/v1.0/install - Start the core installer with a validated configuration.

    Returns code 409 if an installation is already running.
    """
    controller = SessionController()

    if controller.is_running():
        status = controller.get_status()
        return JSONResponse(
            status_code=200,
            content={
                "code": 409,
                "msg": "Installation already in progress",
                "state": status.state.value,
                "progress": status.progress,
            },
        )

    command = config.to_command(settings.core_installer, use_sudo=settings.use_sudo)
    display_command = config.display_command(settings.core_installer, use_sudo=settings.use_sudo)

    if not controller.start(command, display_command):
        status = controller.get_status()
        return JSONResponse(
            status_code=200,
            content={
                "code": 500,
                "msg": status.error or "Failed to start installation",
                "state": status.state.value,
                "progress": status.progress,
            },
        )

    return JSONResponse(
        status_code=200,
        content={"code": 200, "msg": "success", "data": {"command": display_command}},
    )


@router.get("/log", response_class=PlainTextResponse)
async def get_log():
    """GET /api/v1.0/log - Full installation log as plain text."""
    return PlainTextResponse(SessionController().get_log())


@router.get("/sysinfo/current")
def get_current_settings(settings: InstallerSettings = Depends(get_settings)):
    """GET /api/v1.0/sysinfo/current - Current timezone, keyboard and language."""
    service = SystemInfoService(settings.sysinfo_script)
    return {"code": 200, "msg": "success", "data": service.get_current()}


@router.get("/sysinfo/partitions", response_model=PartitionListResponse)
def get_partitions(settings: InstallerSettings = Depends(get_settings)):
    """GET /api/v1.0/sysinfo/partitions - Partitions for manual partitioning."""
    service = SystemInfoService(settings.sysinfo_script)
    return PartitionListResponse(data=service.get_partitions())


@router.get("/sysinfo/variants/{layout}", response_model=ListResponse)
def get_keyboard_variants(layout: str, settings: InstallerSettings = Depends(get_settings)):
    """GET /api/v1.0/sysinfo/variants/{layout} - Keyboard variants, default first.

    Returns code 400 for an invalid layout.
    """
    service = SystemInfoService(settings.sysinfo_script)
    try:
        variants = service.get_variants(layout)
    except ValueError as e:
        return JSONResponse(status_code=200, content={"code": 400, "msg": str(e)})
    return ListResponse(data=variants)


@router.get("/sysinfo/{kind}", response_model=ListResponse)
def get_sysinfo_list(kind: str, settings: InstallerSettings = Depends(get_settings)):
    """GET /api/v1.0/sysinfo/{kind} - Timezones, keyboards, languages or disks.

    Returns code 404 for an unknown kind.
    """
    if kind not in LIST_KINDS:
        return JSONResponse(
            status_code=200,
            content={"code": 404, "msg": f"Unknown system info list: {kind}"},
        )
    service = SystemInfoService(settings.sysinfo_script)
    return ListResponse(data=service.get_list(kind))
