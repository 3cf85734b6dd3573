from sqlalchemy.orm import declarative_base

Base = declarative_base()
import app.models.instructor
import app.models.testimonial
import app.models.instructor_attempt
import app.models.instructor_request
import app.models.instructor_session
