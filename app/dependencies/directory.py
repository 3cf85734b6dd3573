from fastapi import Depends
from sqlalchemy.orm import Session
from app.core.config import DirectoryConfig
from app.db.database import Database
from app.dependencies.db import get_db
from app.services.instructor_account import InstructorAccount
from app.services.instructor_directory import InstructorDirectory


def get_database(db: Session = Depends(get_db)) -> Database:
    return Database(db)

def get_directory(db: Database = Depends(get_database)) -> InstructorDirectory:
    return InstructorDirectory(db, DirectoryConfig.from_settings())

def get_account(db: Database = Depends(get_database)) -> InstructorAccount:
    return InstructorAccount(db, DirectoryConfig.from_settings().tables)
