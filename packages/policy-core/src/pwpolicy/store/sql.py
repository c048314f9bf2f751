"""SQLAlchemy-backed policy store.

Three tables: policies, their role memberships, and their ordered
constraint configs (params stored as JSON text). Lookups are read-only;
``save`` replaces a policy's roles and constraints wholesale.
"""

from __future__ import annotations

import json
import logging

from sqlalchemy import (
    Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
    delete, select,
)
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from pwpolicy.config import PolicySettings
from pwpolicy.models import ConstraintConfig, Policy

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class PolicyRecord(Base):
    __tablename__ = "password_policies"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    password_reset_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    show_policy_table: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class PolicyRoleRecord(Base):
    __tablename__ = "password_policy_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_id: Mapped[str] = mapped_column(String(64), ForeignKey("password_policies.id"), nullable=False)
    role: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        UniqueConstraint("policy_id", "role", name="uq_policy_role"),
        Index("ix_policy_roles_role", "role"),
    )


class PolicyConstraintRecord(Base):
    __tablename__ = "password_policy_constraints"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    policy_id: Mapped[str] = mapped_column(String(64), ForeignKey("password_policies.id"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    constraint_id: Mapped[str] = mapped_column(String(128), nullable=False)
    params_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    __table_args__ = (
        Index("ix_policy_constraints_policy_pos", "policy_id", "position"),
    )


def create_engine(url: str, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine."""
    return sa_create_engine(url, echo=kwargs.get("echo", False), pool_pre_ping=True)


def get_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


class SqlPolicyStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_settings(cls, settings: PolicySettings | None = None) -> SqlPolicyStore:
        """Build a store on ``settings.database_url``, creating tables if missing."""
        settings = settings or PolicySettings()
        engine = create_engine(settings.database_url)
        create_schema(engine)
        return cls(get_session_factory(engine))

    def save(self, policy: Policy) -> None:
        with self._session_factory.begin() as session:
            session.merge(PolicyRecord(
                id=policy.id,
                label=policy.label,
                password_reset_days=policy.password_reset_days,
                show_policy_table=policy.show_policy_table,
            ))
            self._delete_children(session, policy.id)
            session.add_all(
                PolicyRoleRecord(policy_id=policy.id, role=role)
                for role in sorted(policy.roles)
            )
            session.add_all(
                PolicyConstraintRecord(
                    policy_id=policy.id,
                    position=position,
                    constraint_id=config.id,
                    params_json=json.dumps(config.params),
                )
                for position, config in enumerate(policy.constraints)
            )
        logger.info("Saved policy %s (%d constraints)", policy.id, len(policy.constraints))

    def remove(self, policy_id: str) -> bool:
        with self._session_factory.begin() as session:
            record = session.get(PolicyRecord, policy_id)
            if record is None:
                return False
            self._delete_children(session, policy_id)
            session.delete(record)
        return True

    def get(self, policy_id: str) -> Policy | None:
        with self._session_factory() as session:
            return self._load(session, policy_id)

    def find_by_role_membership(self, role_id: str) -> list[Policy]:
        with self._session_factory() as session:
            policy_ids = session.scalars(
                select(PolicyRoleRecord.policy_id)
                .where(PolicyRoleRecord.role == role_id)
                .order_by(PolicyRoleRecord.policy_id)
            ).all()
            policies = [self._load(session, pid) for pid in policy_ids]
        return [p for p in policies if p is not None]

    @staticmethod
    def _delete_children(session: Session, policy_id: str) -> None:
        session.execute(delete(PolicyRoleRecord).where(PolicyRoleRecord.policy_id == policy_id))
        session.execute(delete(PolicyConstraintRecord).where(PolicyConstraintRecord.policy_id == policy_id))

    @staticmethod
    def _load(session: Session, policy_id: str) -> Policy | None:
        record = session.get(PolicyRecord, policy_id)
        if record is None:
            return None
        roles = session.scalars(
            select(PolicyRoleRecord.role).where(PolicyRoleRecord.policy_id == policy_id)
        ).all()
        constraint_rows = session.scalars(
            select(PolicyConstraintRecord)
            .where(PolicyConstraintRecord.policy_id == policy_id)
            .order_by(PolicyConstraintRecord.position)
        ).all()
        return Policy(
            id=record.id,
            label=record.label,
            roles=frozenset(roles),
            constraints=tuple(
                ConstraintConfig(id=row.constraint_id, params=json.loads(row.params_json))
                for row in constraint_rows
            ),
            password_reset_days=record.password_reset_days,
            show_policy_table=record.show_policy_table,
        )
