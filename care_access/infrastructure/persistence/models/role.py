"""Role ORM model. Table: roles. Reporting only; access decisions never read it."""

from sqlalchemy import Boolean, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from care_access.infrastructure.persistence.database import Base


class Role(Base):
    """Role. Description holds the display name on its first line, details after."""

    __tablename__ = "roles"

    role_code: Mapped[str] = mapped_column(String, primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
