ADMIN_EMAIL = 'admin@test.com'
ADMIN_NAME = 'Test Admin'
TEST_USER_EMAIL = 'user@test.com'
TEST_USER_NAME = 'Test User'
ANOTHER_USER_EMAIL = 'another@test.com'
ANOTHER_USER_NAME = 'Another User'

DEFAULT_COURSE_TITLE = 'Async Python in Production'
DEFAULT_COURSE_DESCRIPTION = 'asyncio, SQLAlchemy 2 and FastAPI from the ground up'
DEFAULT_COURSE_CATEGORY = 'programming'
DEFAULT_COURSE_INSTRUCTOR = 'Ada Lovelace'
DEFAULT_COURSE_PRICE = '1500.00'
