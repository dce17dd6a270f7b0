from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from quiet_hours.api.v1.dependencies import get_current_profile, get_uow
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.profile_model import Profile
from quiet_hours.schemas.notification_schema import NotificationResponse
from quiet_hours.schemas.quiet_block_schema import (
    QuietBlockCreate,
    QuietBlockListResponse,
    QuietBlockMutationResponse,
    QuietBlockResponse,
    QuietBlockUpdate,
)
from quiet_hours.services.quiet_block_service import QuietBlockResult, QuietBlockService
from quiet_hours.utils.logger import get_logger

logger = get_logger("quiet_block_router")


class QuietBlockRouter:
    """Class wrapper around APIRouter to keep things OO."""

    def __init__(self) -> None:
        self.router = APIRouter(prefix="/quiet-blocks", tags=["Quiet Blocks"])
        self._register_routes()

    # ---------------------------------------------------------------------- #
    # private
    # ---------------------------------------------------------------------- #
    def _register_routes(self) -> None:
        self.router.post(
            "/",
            response_model=QuietBlockMutationResponse,
            status_code=status.HTTP_201_CREATED,
        )(self._create_quiet_block)
        self.router.get("/", response_model=QuietBlockListResponse)(self._list_quiet_blocks)

        self.router.get("/{quiet_block_id}", response_model=QuietBlockResponse)(self._get_quiet_block)
        self.router.put("/{quiet_block_id}", response_model=QuietBlockMutationResponse)(self._update_quiet_block)
        self.router.post("/{quiet_block_id}/deactivate", response_model=QuietBlockResponse)(
            self._deactivate_quiet_block
        )
        self.router.delete(
            "/{quiet_block_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
        )(self._delete_quiet_block)

        self.router.get(
            "/{quiet_block_id}/notification",
            response_model=Optional[NotificationResponse],
        )(self._get_notification)

    @staticmethod
    def _mutation_response(result: QuietBlockResult) -> QuietBlockMutationResponse:
        return QuietBlockMutationResponse(
            quiet_block=QuietBlockResponse.model_validate(result.quiet_block),
            reminder_scheduled=result.reminder_scheduled,
            reminder_error=result.reminder_error,
            notification=(
                NotificationResponse.model_validate(result.notification)
                if result.notification is not None
                else None
            ),
        )

    # ---------------------------------------------------------------------- #
    # endpoints
    # ---------------------------------------------------------------------- #
    def _create_quiet_block(
        self,
        payload: QuietBlockCreate,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        logger.info(f"Creating quiet block for {profile.id}")
        result = QuietBlockService(uow).create_quiet_block(profile.id, payload)
        return self._mutation_response(result)

    def _list_quiet_blocks(
        self,
        upcoming_only: bool = Query(False),
        include_inactive: bool = Query(False),
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        blocks = QuietBlockService(uow).list_quiet_blocks(
            profile.id,
            upcoming_only=upcoming_only,
            include_inactive=include_inactive,
        )
        return QuietBlockListResponse(
            items=[QuietBlockResponse.model_validate(b) for b in blocks],
            total=len(blocks),
        )

    def _get_quiet_block(
        self,
        quiet_block_id: str,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        return QuietBlockService(uow).get_quiet_block(profile.id, quiet_block_id)

    def _update_quiet_block(
        self,
        quiet_block_id: str,
        payload: QuietBlockUpdate,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        logger.info(f"Updating quiet block {quiet_block_id}")
        result = QuietBlockService(uow).update_quiet_block(profile.id, quiet_block_id, payload)
        return self._mutation_response(result)

    def _deactivate_quiet_block(
        self,
        quiet_block_id: str,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        return QuietBlockService(uow).deactivate_quiet_block(profile.id, quiet_block_id)

    def _delete_quiet_block(
        self,
        quiet_block_id: str,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        logger.info(f"Deleting quiet block {quiet_block_id}")
        QuietBlockService(uow).delete_quiet_block(profile.id, quiet_block_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    def _get_notification(
        self,
        quiet_block_id: str,
        uow: UnitOfWork = Depends(get_uow),
        profile: Profile = Depends(get_current_profile),
    ):
        return QuietBlockService(uow).get_notification(profile.id, quiet_block_id)


quiet_block_router = QuietBlockRouter().router
