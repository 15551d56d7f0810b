import datetime as dt

from sqlalchemy import Date, ForeignKey, Integer, JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fifa_league.storage.database import Base


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    team: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    position: Mapped[str | None] = mapped_column(String(32), nullable=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    goals: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    team_a: Mapped[str] = mapped_column(String(32), nullable=False, default="AEK")
    team_b: Mapped[str] = mapped_column(String(32), nullable=False, default="Real")
    score_a: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score_b: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    scorers_a: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    scorers_b: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    yellow_a: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    red_a: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    yellow_b: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    red_b: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    man_of_the_match: Mapped[str | None] = mapped_column(String(128), nullable=True)
    prize_a: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    prize_b: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Ban(Base):
    __tablename__ = "bans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    player_id: Mapped[int | None] = mapped_column(ForeignKey("players.id"), nullable=True, index=True)
    team: Mapped[str] = mapped_column(String(32), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False, default="Rot")
    total_games: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    matches_served: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)


class Finance(Base):
    __tablename__ = "finances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    team: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    debt: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    team: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    match_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    info: Mapped[str | None] = mapped_column(Text, nullable=True)


class MotmAward(Base):
    __tablename__ = "spieler_des_spiels"
    __table_args__ = (UniqueConstraint("name", "team", name="uq_spieler_des_spiels_name_team"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    team: Mapped[str] = mapped_column(String(32), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
