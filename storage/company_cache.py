"""
Company Cache - companies seen in searches and company lookups

One row per company name. Rows are only ever inserted or merged into,
never deleted through normal use.
"""
from datetime import datetime, timezone
from typing import List, Optional
import asyncio
import logging

from sqlalchemy import JSON, DateTime, Integer, String, Text, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, mapped_column

from models.company import Company
from storage.database import Base, create_db_engine, create_session_factory
from utils.data_utils import company_website


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CachedCompany(Base):
    __tablename__ = "company_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website_url: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    industry: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tech_stack: Mapped[list] = mapped_column(JSON, default=list)
    last_fetched: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_model(self) -> Company:
        return Company(
            name=self.name,
            description=self.description,
            websiteUrl=self.website_url,
            logo=self.logo,
            industry=self.industry,
            location=self.location,
            techStack=list(self.tech_stack or []),
            lastFetched=self.last_fetched,
            source="cache",
        )


class CompanyCache:
    """Upsert-only store of company metadata keyed by name"""

    def __init__(self, database_url: str):
        self.engine = create_db_engine(database_url)
        self.Session = create_session_factory(self.engine)

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def _find_row(self, session, name: str) -> Optional[CachedCompany]:
        stmt = select(CachedCompany).where(func.lower(CachedCompany.name) == name.strip().lower())
        return session.scalars(stmt).first()

    def find(self, name: str) -> Optional[Company]:
        """Look a company up by name, ignoring case"""
        if not name or not name.strip():
            return None
        with self.Session() as session:
            row = self._find_row(session, name)
            return row.to_model() if row else None

    def upsert(self, name: str, logo: Optional[str] = None, description: Optional[str] = None,
               website_url: Optional[str] = None, industry: Optional[str] = None,
               location: Optional[str] = None, tech_stack: Optional[List[str]] = None) -> Optional[Company]:
        """
        Insert a company or merge newly observed fields into it

        Only non-null values overwrite stored ones; last_fetched always moves
        to now. A concurrent insert of the same name is merged instead.
        """
        if not name or not name.strip():
            return None
        name = name.strip()
        fields = {
            "logo": logo,
            "description": description,
            "website_url": website_url,
            "industry": industry,
            "location": location,
            "tech_stack": tech_stack,
        }

        try:
            return self._write(name, fields)
        except IntegrityError:
            # Another request inserted the same company first
            return self._write(name, fields)

    def _write(self, name: str, fields: dict) -> Company:
        with self.Session() as session:
            row = self._find_row(session, name)
            if row is None:
                row = CachedCompany(
                    name=name,
                    description=fields["description"] or f"{name} is a leading technology company.",
                    website_url=fields["website_url"] or company_website(name),
                    logo=fields["logo"],
                    industry=fields["industry"],
                    location=fields["location"],
                    tech_stack=list(fields["tech_stack"] or []),
                )
                session.add(row)
            else:
                for attr, value in fields.items():
                    if value is not None:
                        setattr(row, attr, list(value) if attr == "tech_stack" else value)
            row.last_fetched = utcnow()
            session.commit()
            return row.to_model()

    async def upsert_async(self, name: str, **fields) -> None:
        """Best-effort upsert for background use; failures are logged and dropped"""
        try:
            await asyncio.to_thread(self.upsert, name, **fields)
        except Exception as e:
            logging.warning(f"Company cache write failed for {name}: {str(e)}")

    async def find_async(self, name: str) -> Optional[Company]:
        try:
            return await asyncio.to_thread(self.find, name)
        except Exception as e:
            logging.warning(f"Company cache lookup failed for {name}: {str(e)}")
            return None


async def cache_companies(cache: Optional[CompanyCache], companies: List[tuple]) -> None:
    """
    Background task: upsert (name, logo) pairs, once per distinct name

    Args:
        cache: The company cache, or None when caching is disabled
        companies: (name, logo) pairs from a search response
    """
    if cache is None:
        return
    distinct = {}
    for name, logo in companies:
        key = (name or "").strip().lower()
        if not key:
            continue
        if key not in distinct:
            distinct[key] = (name, logo)
        elif logo and not distinct[key][1]:
            distinct[key] = (distinct[key][0], logo)

    for name, logo in distinct.values():
        await cache.upsert_async(name, logo=logo)
