from __future__ import annotations

from sqlalchemy import Boolean, Column, Float, Integer, String, Text, UniqueConstraint

from db import Base


class Employee(Base):
    __tablename__ = "employees"

    employeeId = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False, default="")
    dobBS = Column(String, nullable=False, default="")
    seniorityDateBS = Column(String, nullable=False, default="")
    level = Column(Integer, nullable=False, default=0)
    # Raw sex code from the service detail report (M/F/Male/Female).
    sex = Column(String, nullable=False, default="")
    education = Column(Text, nullable=False, default="")
    workOffice = Column(Text, nullable=False, default="")
    createdAt = Column(Text, nullable=False, default="")
    updatedAt = Column(Text, nullable=False, default="")


class AssignmentDetail(Base):
    __tablename__ = "assignment_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employeeId = Column(Integer, nullable=False, index=True)
    # Position within the imported sheet, synthetic rows included.
    rowOrder = Column(Integer, nullable=False, default=0)
    startDateBS = Column(String, nullable=False, default="")
    endDateBS = Column(String, nullable=True)
    position = Column(Text, nullable=False, default="")
    jobs = Column(Text, nullable=False, default="")
    function = Column(Text, nullable=False, default="")
    empCategory = Column(String, nullable=False, default="")
    empType = Column(String, nullable=False, default="")
    workOffice = Column(Text, nullable=False, default="")
    level = Column(Integer, nullable=False, default=0)
    seniorityDateBS = Column(String, nullable=True)
    permLevelDateBS = Column(String, nullable=True)
    reasonForPosition = Column(Text, nullable=True)
    synthetic = Column(Boolean, nullable=False, default=False)

    totalGeographicalMarks = Column(Float, nullable=False, default=0.0)
    numDaysOld = Column(Integer, nullable=False, default=0)
    numDaysNew = Column(Integer, nullable=False, default=0)
    totalNumDays = Column(Integer, nullable=False, default=0)


class AbsentDetail(Base):
    __tablename__ = "absent_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employeeId = Column(Integer, nullable=False, index=True)
    fromDateBS = Column(String, nullable=False, default="")
    toDateBS = Column(String, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0.0)
    remarks = Column(Text, nullable=True)


class LeaveDetail(Base):
    __tablename__ = "leave_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employeeId = Column(Integer, nullable=False, index=True)
    leaveType = Column(String, nullable=False, default="", index=True)
    fromDateBS = Column(String, nullable=False, default="")
    toDateBS = Column(String, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0.0)
    remarks = Column(Text, nullable=True)


class Office(Base):
    __tablename__ = "offices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    district = Column(String, nullable=False, default="")


class District(Base):
    __tablename__ = "districts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=False, default="")


class CategoryMarks(Base):
    __tablename__ = "category_marks"
    __table_args__ = (UniqueConstraint("category", "type", "gender", name="uq_category_marks_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String, nullable=False)
    marks = Column(Float, nullable=False, default=0.0)
    # 'old' or 'new'
    type = Column(String, nullable=False)
    # 'male' / 'female' for old rows, NULL for new rows.
    gender = Column(String, nullable=True)


class Vacancy(Base):
    __tablename__ = "vacancies"

    bigyapanNo = Column(String, primary_key=True)
    numPositions = Column(Integer, nullable=False, default=1)
    level = Column(Integer, nullable=False, default=0)
    service = Column(Text, nullable=False, default="")
    group = Column(Text, nullable=False, default="")
    subGroup = Column(Text, nullable=False, default="")
    position = Column(Text, nullable=False, default="")
    fiscalYear = Column(String, nullable=False, default="")
    bigyapanEndDateBS = Column(String, nullable=False, default="")


class Applicant(Base):
    __tablename__ = "applicants"

    employeeId = Column(Integer, primary_key=True)
    bigyapanNo = Column(String, primary_key=True)
    seniorityMarks = Column(Float, nullable=True)
    geographicalMarks = Column(Float, nullable=True)
    educationMarks = Column(Float, nullable=True)
    scoredAt = Column(Text, nullable=False, default="")
