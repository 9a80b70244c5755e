from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.course_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.course_booking.app.command.complete_reservation_use_case import (
    CompleteReservationUseCase,
)
from src.service.course_booking.app.command.confirm_reservation_use_case import (
    ConfirmReservationUseCase,
)
from src.service.course_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.course_booking.app.command.rate_reservation_use_case import (
    RateReservationUseCase,
)
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.dto.reservation_detail import ReservationDetail
from src.service.course_booking.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.course_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus
from src.service.course_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.course_booking.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationCancelRequest,
    ReservationCreateRequest,
    ReservationDetailResponse,
    ReservationListResponse,
    ReservationRateRequest,
    ReservationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_list_response(result: Page[ReservationDetail]) -> ReservationListResponse:
    return ReservationListResponse(
        items=[ReservationDetailResponse.from_detail(detail) for detail in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get('/my_reservation', response_model=ReservationListResponse)
@Logger.io
async def list_my_reservations(
    reservation_status: Optional[ReservationStatus] = Query(None, alias='status'),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ReservationListResponse:
    result = await use_case.list_mine(
        user_id=current_user.id or 0, status=reservation_status, page=page, limit=limit
    )
    return _to_list_response(result)


@router.get('/admin/all', response_model=ReservationListResponse)
@Logger.io
async def list_all_reservations(
    reservation_status: Optional[ReservationStatus] = Query(None, alias='status'),
    course_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ReservationListResponse:
    result = await use_case.list_all(
        actor=current_user,
        status=reservation_status,
        course_id=course_id,
        page=page,
        limit=limit,
    )
    return _to_list_response(result)


@router.post('', status_code=status.HTTP_201_CREATED, response_model=ReservationResponse)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.create_reservation') as span:
        span.set_attribute('course.id', request.course_id)
        span.set_attribute('user.id', current_user.id or 0)

        reservation = await use_case.execute(
            actor=current_user,
            course_id=request.course_id,
            payment_method=request.payment_method,
            notes=request.notes,
        )

        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation)


@router.get('/{reservation_id}', response_model=ReservationDetailResponse)
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationDetailResponse:
    detail = await use_case.get_reservation(reservation_id=reservation_id, actor=current_user)
    return ReservationDetailResponse.from_detail(detail)


@router.patch('/{reservation_id}/cancel', response_model=ReservationResponse)
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    request: Optional[ReservationCancelRequest] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        actor=current_user,
        reason=request.reason if request else None,
    )
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/rate', response_model=ReservationResponse)
@Logger.io
async def rate_reservation(
    reservation_id: UtilsUUID7,
    request: ReservationRateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: RateReservationUseCase = Depends(RateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id,
        user_id=current_user.id or 0,
        rating=request.rating,
        comment=request.comment,
    )
    return ReservationResponse.from_entity(reservation)


@router.patch('/admin/{reservation_id}/confirm', response_model=ReservationResponse)
@Logger.io
async def confirm_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_admin),
    use_case: ConfirmReservationUseCase = Depends(ConfirmReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id, actor=current_user)
    return ReservationResponse.from_entity(reservation)


@router.patch('/admin/{reservation_id}/complete', response_model=ReservationResponse)
@Logger.io
async def complete_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_admin),
    use_case: CompleteReservationUseCase = Depends(CompleteReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id, actor=current_user)
    return ReservationResponse.from_entity(reservation)
