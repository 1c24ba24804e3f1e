from .user import User
from .publication_range import PublicationRange
from .vacancy import Vacancy
from .candidate import Candidate
from .competency import Competency, competency_vacancies
from .rating import Rating
from .rating_log import RatingLog
# base mixins are imported by the above as needed
