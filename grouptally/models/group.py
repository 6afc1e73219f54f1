"""
Group and member models for shared expense tracking.
"""
from sqlalchemy import Column, String, Text, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from grouptally.db.base import BaseModel
import enum


class MemberRole(str, enum.Enum):
    """Member role enumeration."""
    ADMIN = "admin"
    MEMBER = "member"


class Group(BaseModel):
    """Group model representing people who share expenses."""
    __tablename__ = "groups"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    members = relationship(
        "GroupMember", back_populates="group",
        cascade="all, delete-orphan", order_by="GroupMember.id"
    )
    expenses = relationship("Expense", back_populates="group", cascade="all, delete-orphan")
    settlements = relationship("Settlement", back_populates="group", cascade="all, delete-orphan")


class GroupMember(BaseModel):
    """A person taking part in a group's expenses."""
    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "email", name="uq_group_member_email"),
    )

    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    payment_address = Column(String(255), nullable=True)  # Opaque, used by payment apps only
    role = Column(SQLEnum(MemberRole), default=MemberRole.MEMBER, nullable=False)

    # Relationships
    group = relationship("Group", back_populates="members")
