# apps/api/app/db/models_scheduling.py
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, func

from app.db.base import Base

# 1 = Monday ... 7 = Sunday
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class Availability(Base):
    __tablename__ = "availability"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sin = Column(String(32), ForeignKey("employee.sin"), nullable=False, index=True)
    weekday = Column(String(9), nullable=False)      # WEEKDAYS
    emp_start = Column(Float, nullable=False)        # decimal hours, 9.5 == 09:30
    emp_end = Column(Float, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("sin", "weekday", name="uq_availability_sin_weekday"),
        CheckConstraint("emp_start < emp_end", name="ck_availability_window"),
    )


class ScheduleAssignment(Base):
    __tablename__ = "schedule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    esin = Column(String(32), ForeignKey("employee.sin"), nullable=False, index=True)
    week = Column(Integer, nullable=False)           # 1..52
    msin = Column(String(32), ForeignKey("manager.sin"), nullable=False)  # last confirming manager
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("esin", "week", name="uq_schedule_esin_week"),
        CheckConstraint("week BETWEEN 1 AND 52", name="ck_schedule_week"),
    )


class Shift(Base):
    __tablename__ = "shift"

    id = Column(Integer, primary_key=True, autoincrement=True)
    esin = Column(String(32), ForeignKey("employee.sin"), nullable=False, index=True)
    msin = Column(String(32), ForeignKey("manager.sin"), nullable=False)  # creator
    day = Column(Integer, nullable=False)            # 1..7, see WEEKDAYS
    week = Column(Integer, nullable=False)           # 1..52
    month = Column(Integer, nullable=False)          # 1..12
    length = Column(Float, nullable=False)           # hours
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("esin", "day", "week", "month", name="uq_shift_esin_day_week_month"),
        CheckConstraint("day BETWEEN 1 AND 7", name="ck_shift_day"),
        CheckConstraint("week BETWEEN 1 AND 52", name="ck_shift_week"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_shift_month"),
        CheckConstraint("length > 0", name="ck_shift_length"),
    )
