# teesheet/models/tee_sheets.py
"""
Authoritative schema for tee sheets.

Every column lives here once; scripts/init_db.py creates the tables from
this metadata. Times of day are stored as "HH:MM" text, dates as ISO text.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata

COURSE_STATUSES = ("Active", "Inactive", "Suspended")


class GolfCourseInstances(Base):
    __tablename__ = 'GolfCourseInstances'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    timezone = Column(String(64), nullable=False, server_default=text("'UTC'"))
    status = Column(
        Enum(*COURSE_STATUSES, name='enum_GolfCourseInstances_status'),
        nullable=False,
        server_default=text("'Active'"),
    )
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    tee_sheets = relationship('TeeSheets', back_populates='course')


class TeeSheets(Base):
    __tablename__ = 'TeeSheets'

    id = Column(Integer, primary_key=True)
    course_id = Column(ForeignKey('GolfCourseInstances.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    daily_release_local = Column(String(8))
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    course = relationship('GolfCourseInstances', back_populates='tee_sheets')
    templates = relationship('TeeSheetTemplates', back_populates='tee_sheet')
    seasons = relationship('TeeSheetSeasons', back_populates='tee_sheet')
    overrides = relationship('TeeSheetOverrides', back_populates='tee_sheet')
    tee_times = relationship('TeeTimes', back_populates='tee_sheet')


class TeeSheetTemplates(Base):
    __tablename__ = 'TeeSheetTemplates'

    id = Column(Integer, primary_key=True)
    tee_sheet_id = Column(ForeignKey('TeeSheets.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(120), nullable=False, server_default=text("'Untitled Template'"))
    color = Column(String(16))
    interval_mins = Column(Integer, nullable=False, server_default=text('10'))
    is_default = Column(Integer, nullable=False, server_default=text('0'))
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    tee_sheet = relationship('TeeSheets', back_populates='templates')
    timeframes = relationship(
        'Timeframes',
        back_populates='template',
        order_by='Timeframes.position',
        cascade='all, delete-orphan',
    )


class TeeSheetSeasons(Base):
    __tablename__ = 'TeeSheetSeasons'

    id = Column(Integer, primary_key=True)
    tee_sheet_id = Column(ForeignKey('TeeSheets.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(120), nullable=False, server_default=text("'Untitled Season'"))
    color = Column(String(16))
    start_date = Column(Text, nullable=False)
    end_date_exclusive = Column(Text, nullable=False)
    # NULL = spacing of the default template
    interval_mins = Column(Integer)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    __table_args__ = (
        CheckConstraint('start_date < end_date_exclusive', name='ck_season_range'),
    )

    tee_sheet = relationship('TeeSheets', back_populates='seasons')
    timeframes = relationship(
        'Timeframes',
        back_populates='season',
        order_by='Timeframes.position',
        cascade='all, delete-orphan',
    )


class TeeSheetOverrides(Base):
    __tablename__ = 'TeeSheetOverrides'

    id = Column(Integer, primary_key=True)
    tee_sheet_id = Column(ForeignKey('TeeSheets.id', ondelete='CASCADE'), nullable=False)
    date = Column(Text, nullable=False)
    name = Column(String(120), nullable=False, server_default=text("'Untitled Override'"))
    color = Column(String(16))
    interval_mins = Column(Integer)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    __table_args__ = (
        UniqueConstraint('tee_sheet_id', 'date', name='uq_override_sheet_date'),
    )

    tee_sheet = relationship('TeeSheets', back_populates='overrides')
    timeframes = relationship(
        'Timeframes',
        back_populates='override',
        order_by='Timeframes.position',
        cascade='all, delete-orphan',
    )


class Timeframes(Base):
    __tablename__ = 'Timeframes'

    id = Column(Integer, primary_key=True)
    template_id = Column(ForeignKey('TeeSheetTemplates.id', ondelete='CASCADE'))
    season_id = Column(ForeignKey('TeeSheetSeasons.id', ondelete='CASCADE'))
    override_id = Column(ForeignKey('TeeSheetOverrides.id', ondelete='CASCADE'))
    # 0 = Sunday .. 6 = Saturday; seasons only. NULL = every other day
    weekday = Column(Integer)
    position = Column(Integer, nullable=False, server_default=text('0'))
    start_time_local = Column(String(5), nullable=False)
    end_time_local = Column(String(5), nullable=False)

    __table_args__ = (
        CheckConstraint(
            '(template_id IS NOT NULL) + (season_id IS NOT NULL) + (override_id IS NOT NULL) = 1',
            name='ck_timeframe_single_owner',
        ),
        CheckConstraint(
            'weekday IS NULL OR (weekday BETWEEN 0 AND 6 AND season_id IS NOT NULL)',
            name='ck_timeframe_weekday',
        ),
    )

    template = relationship('TeeSheetTemplates', back_populates='timeframes')
    season = relationship('TeeSheetSeasons', back_populates='timeframes')
    override = relationship('TeeSheetOverrides', back_populates='timeframes')


class TeeTimes(Base):
    __tablename__ = 'TeeTimes'

    id = Column(Integer, primary_key=True)
    tee_sheet_id = Column(ForeignKey('TeeSheets.id', ondelete='CASCADE'), nullable=False)
    start_time = Column(Text, nullable=False)  # "YYYY-MM-DD HH:MM" course-local
    capacity = Column(Integer, nullable=False, server_default=text('4'))
    assigned_count = Column(Integer, nullable=False, server_default=text('0'))
    is_blocked = Column(Integer, nullable=False, server_default=text('0'))

    __table_args__ = (
        UniqueConstraint('tee_sheet_id', 'start_time', name='uq_teetime_sheet_start'),
    )

    tee_sheet = relationship('TeeSheets', back_populates='tee_times')
