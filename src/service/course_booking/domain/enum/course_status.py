from enum import StrEnum


class CourseStatus(StrEnum):
    DRAFT = 'draft'
    ACTIVE = 'active'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


class CourseModality(StrEnum):
    IN_PERSON = 'in_person'
    VIRTUAL = 'virtual'
    HYBRID = 'hybrid'
