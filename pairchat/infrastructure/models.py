# pairchat/infrastructure/models.py
from pairchat.infrastructure.database import Base
from sqlalchemy import BigInteger, Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

# SQLite only autoincrements INTEGER PRIMARY KEY columns
Id = BigInteger().with_variant(Integer, "sqlite")


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String, unique=True, index=True)
    password: Mapped[str] = mapped_column(String)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)


class Chat(Base):
    __tablename__ = "chats"

    __table_args__ = (
        Index("ix_chats_owner_last_activity", "owner", "last_activity"),
        Index("ix_chats_receiver_last_activity", "receiver", "last_activity"),
    )

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    owner: Mapped[int] = mapped_column(BigInteger, index=True)
    receiver: Mapped[int] = mapped_column(BigInteger, index=True)
    pair_key: Mapped[str] = mapped_column(String, unique=True)
    last_activity: Mapped[int] = mapped_column(BigInteger)


class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (Index("ix_messages_chat_sent_at", "chat", "sent_at"),)

    # no foreign key on chat: messages outlive a deleted chat
    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    sender: Mapped[int] = mapped_column(BigInteger, index=True)
    chat: Mapped[int] = mapped_column(BigInteger)
    content: Mapped[str] = mapped_column(String(300))
    sent_at: Mapped[int] = mapped_column(BigInteger)


class Activity(Base):
    __tablename__ = "activities"

    __table_args__ = (Index("ix_activities_type_timestamp", "type", "timestamp"),)

    id: Mapped[int] = mapped_column(Id, primary_key=True, autoincrement=True)
    owner: Mapped[int] = mapped_column(BigInteger, index=True)
    type: Mapped[str] = mapped_column(String)
    timestamp: Mapped[int] = mapped_column(BigInteger)
