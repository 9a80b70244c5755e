from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.command.create_course_use_case import CreateCourseUseCase
from src.service.course_booking.app.command.delete_course_use_case import DeleteCourseUseCase
from src.service.course_booking.app.command.update_course_use_case import UpdateCourseUseCase
from src.service.course_booking.app.dto.course_filter import CourseFilter
from src.service.course_booking.app.query.get_course_use_case import GetCourseUseCase
from src.service.course_booking.app.query.list_courses_use_case import ListCoursesUseCase
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus
from src.service.course_booking.driving_adapter.http_controller.auth.role_auth import (
    get_optional_user,
    require_admin,
)
from src.service.course_booking.driving_adapter.http_controller.schema.course_schema import (
    CourseCreateRequest,
    CourseListResponse,
    CourseResponse,
    CourseUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=CourseListResponse)
@Logger.io
async def list_courses(
    course_status: Optional[CourseStatus] = Query(None, alias='status'),
    category: Optional[str] = None,
    modality: Optional[CourseModality] = None,
    instructor: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    viewer: Optional[UserEntity] = Depends(get_optional_user),
    use_case: ListCoursesUseCase = Depends(ListCoursesUseCase.depends),
) -> CourseListResponse:
    result = await use_case.list_courses(
        course_filter=CourseFilter(
            status=course_status, category=category, modality=modality, instructor=instructor
        ),
        page=page,
        limit=limit,
        viewer=viewer,
    )
    return CourseListResponse(
        items=[CourseResponse.from_entity(course) for course in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get('/active', response_model=List[CourseResponse])
@Logger.io
async def list_reservable_courses(
    use_case: ListCoursesUseCase = Depends(ListCoursesUseCase.depends),
) -> List[CourseResponse]:
    courses = await use_case.list_reservable()
    return [CourseResponse.from_entity(course) for course in courses]


@router.get('/categories', response_model=List[str])
@Logger.io
async def list_categories(
    use_case: ListCoursesUseCase = Depends(ListCoursesUseCase.depends),
) -> List[str]:
    return await use_case.list_categories()


@router.get('/{course_id}', response_model=CourseResponse)
@Logger.io
async def get_course(
    course_id: int,
    viewer: Optional[UserEntity] = Depends(get_optional_user),
    use_case: GetCourseUseCase = Depends(GetCourseUseCase.depends),
) -> CourseResponse:
    course = await use_case.get_by_id(course_id=course_id, viewer=viewer)
    return CourseResponse.from_entity(course)


@router.post('', status_code=status.HTTP_201_CREATED, response_model=CourseResponse)
@Logger.io
async def create_course(
    request: CourseCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateCourseUseCase = Depends(CreateCourseUseCase.depends),
) -> CourseResponse:
    with tracer.start_as_current_span('controller.create_course') as span:
        span.set_attribute('user.id', current_user.id or 0)

        course = await use_case.execute(actor=current_user, **request.model_dump())

        span.set_attribute('course.id', course.id or 0)
        return CourseResponse.from_entity(course)


@router.patch('/{course_id}', response_model=CourseResponse)
@Logger.io
async def update_course(
    course_id: int,
    request: CourseUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateCourseUseCase = Depends(UpdateCourseUseCase.depends),
) -> CourseResponse:
    course = await use_case.execute(
        course_id=course_id,
        actor=current_user,
        changes=request.model_dump(exclude_unset=True),
    )
    return CourseResponse.from_entity(course)


@router.delete('/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_course(
    course_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteCourseUseCase = Depends(DeleteCourseUseCase.depends),
) -> None:
    await use_case.execute(course_id=course_id, actor=current_user)
