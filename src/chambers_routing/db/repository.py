"""SQLite repository for barristers, workloads and enquiries."""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional
from functools import lru_cache

from sqlalchemy import (
    create_engine,
    Column,
    String,
    Integer,
    Float,
    Boolean,
    DateTime,
    Text,
    Index,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from ..config import settings
from ..models import Barrister, Enquiry

Base = declarative_base()


# =============================================================================
# SQLAlchemy Models (Database Tables)
# =============================================================================

class BarristerRecord(Base):
    """SQLAlchemy model for barristers table."""

    __tablename__ = "barristers"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255))
    year_of_call = Column(Integer)
    practice_areas = Column(Text)  # JSON array
    seniority = Column(String(20), nullable=False, index=True)
    is_active = Column(Boolean, default=True, index=True)
    engagement_score = Column(Float, default=0.0, index=True)

    # Workload points, maintained as tasks are assigned and completed
    current_workload = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_barristers_active_engagement", "is_active", "engagement_score"),
    )

    def to_model(self) -> Barrister:
        return Barrister(
            id=self.id,
            name=self.name,
            email=self.email,
            year_of_call=self.year_of_call,
            practice_areas=json.loads(self.practice_areas or "[]"),
            seniority=self.seniority,
            is_active=self.is_active,
            engagement_score=self.engagement_score,
            current_workload=self.current_workload,
        )


class EnquiryRecord(Base):
    """SQLAlchemy model for enquiries table."""

    __tablename__ = "enquiries"

    id = Column(String(36), primary_key=True)
    lex_reference = Column(String(100), index=True)
    practice_area = Column(String(100), index=True)
    matter_type = Column(String(100))
    description = Column(Text)
    estimated_value = Column(Float)
    urgency = Column(String(20), index=True)
    complexity = Column(String(20))
    assigned_barrister_id = Column(String(36), index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_model(self) -> Enquiry:
        return Enquiry(
            id=self.id,
            lex_reference=self.lex_reference,
            practice_area=self.practice_area,
            matter_type=self.matter_type,
            description=self.description,
            estimated_value=self.estimated_value,
            urgency=self.urgency,
            complexity=self.complexity,
            assigned_barrister_id=self.assigned_barrister_id,
        )


# =============================================================================
# Repository Class
# =============================================================================

class Repository:
    """Repository for database operations."""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL

        # Ensure data directory exists
        if self.database_url.startswith("sqlite:///"):
            db_path = Path(self.database_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            self.database_url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False} if "sqlite" in self.database_url else {},
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def init_db(self) -> None:
        """Create all tables."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()

    # =========================================================================
    # Barrister Operations
    # =========================================================================

    def save_barrister(self, barrister: Barrister) -> Barrister:
        """Save or update a barrister."""
        with self.get_session() as session:
            record = session.get(BarristerRecord, barrister.id)

            if record is None:
                record = BarristerRecord(id=barrister.id)
                session.add(record)

            record.name = barrister.name
            record.email = barrister.email
            record.year_of_call = barrister.year_of_call
            record.practice_areas = json.dumps(list(barrister.practice_areas))
            record.seniority = barrister.seniority.value
            record.is_active = barrister.is_active
            record.engagement_score = barrister.engagement_score
            if barrister.current_workload is not None:
                record.current_workload = barrister.current_workload
            elif record.current_workload is None:
                record.current_workload = 0

            session.commit()
            return record.to_model()

    def get_barrister(self, barrister_id: str) -> Optional[Barrister]:
        """Get a barrister by ID."""
        with self.get_session() as session:
            record = session.get(BarristerRecord, barrister_id)
            return record.to_model() if record else None

    def list_barristers(
        self,
        active_only: bool = True,
        ids: Optional[list[str]] = None,
        seniority: Optional[str] = None,
        min_engagement: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> list[Barrister]:
        """List barristers, most engaged first."""
        with self.get_session() as session:
            query = session.query(BarristerRecord)

            if active_only:
                query = query.filter(BarristerRecord.is_active == True)  # noqa: E712
            if ids is not None:
                query = query.filter(BarristerRecord.id.in_(ids))
            if seniority:
                query = query.filter(BarristerRecord.seniority == seniority)
            if min_engagement is not None:
                query = query.filter(BarristerRecord.engagement_score >= min_engagement)

            query = query.order_by(BarristerRecord.engagement_score.desc(), BarristerRecord.id)
            if limit:
                query = query.limit(limit)

            return [record.to_model() for record in query.all()]

    def get_workload_counters(self, barrister_ids: Optional[list[str]] = None) -> dict[str, int]:
        """Current workload counter per barrister id."""
        with self.get_session() as session:
            query = session.query(BarristerRecord.id, BarristerRecord.current_workload)
            if barrister_ids is not None:
                query = query.filter(BarristerRecord.id.in_(barrister_ids))
            return {barrister_id: current or 0 for barrister_id, current in query.all()}

    def set_workload(self, barrister_id: str, current_workload: int) -> bool:
        """Overwrite a barrister's workload counter."""
        with self.get_session() as session:
            record = session.get(BarristerRecord, barrister_id)
            if record is None:
                return False
            record.current_workload = max(0, current_workload)
            session.commit()
            return True

    # =========================================================================
    # Enquiry Operations
    # =========================================================================

    def save_enquiry(self, enquiry: Enquiry) -> Enquiry:
        """Save or update an enquiry."""
        with self.get_session() as session:
            record = session.get(EnquiryRecord, enquiry.id)

            if record is None:
                record = EnquiryRecord(id=enquiry.id)
                session.add(record)

            record.lex_reference = enquiry.lex_reference
            record.practice_area = enquiry.practice_area
            record.matter_type = enquiry.matter_type
            record.description = enquiry.description
            record.estimated_value = enquiry.estimated_value
            record.urgency = enquiry.urgency.value if enquiry.urgency else None
            record.complexity = enquiry.complexity.value if enquiry.complexity else None
            record.assigned_barrister_id = enquiry.assigned_barrister_id

            session.commit()
            return enquiry

    def get_enquiry(self, enquiry_id: str) -> Optional[Enquiry]:
        """Get an enquiry by ID."""
        with self.get_session() as session:
            record = session.get(EnquiryRecord, enquiry_id)
            return record.to_model() if record else None

    def list_enquiries(self, unassigned_only: bool = False, limit: int = 100) -> list[Enquiry]:
        """List enquiries, newest first."""
        with self.get_session() as session:
            query = session.query(EnquiryRecord)
            if unassigned_only:
                query = query.filter(EnquiryRecord.assigned_barrister_id.is_(None))
            query = query.order_by(EnquiryRecord.created_at.desc(), EnquiryRecord.id).limit(limit)
            return [record.to_model() for record in query.all()]

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> dict:
        """Get database statistics."""
        with self.get_session() as session:
            return {
                "barristers": {
                    "total": session.query(BarristerRecord).count(),
                    "active": session.query(BarristerRecord).filter_by(is_active=True).count(),
                },
                "enquiries": {
                    "total": session.query(EnquiryRecord).count(),
                    "unassigned": session.query(EnquiryRecord).filter(
                        EnquiryRecord.assigned_barrister_id.is_(None)
                    ).count(),
                },
            }


@lru_cache
def get_repository() -> Repository:
    """Get cached repository instance."""
    repo = Repository()
    repo.init_db()
    return repo
