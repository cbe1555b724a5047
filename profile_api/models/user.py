from sqlalchemy import Column, Integer, String

from profile_api.models.database import Base


class User(Base):
    __tablename__ = "users"
    # ids are never reused, even on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # Stored image file name, NULL when the user was added without one
    profile_reference = Column("profileReference", String(300), nullable=True)
