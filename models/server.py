from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from models.base import Base

class ServerRow(Base):
    __tablename__ = "servers"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    address: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hostname: Mapped[str] = mapped_column(String(255))
    players: Mapped[int] = mapped_column(Integer, default=0)
    max_players: Mapped[int] = mapped_column(Integer)
    gamemode: Mapped[str] = mapped_column(String(255))
    language: Mapped[str] = mapped_column(String(64), default="")
    password: Mapped[bool] = mapped_column(Boolean, default=False)
    # rules and player list are stored as-is, never queried
    rules: Mapped[dict] = mapped_column(JSON, default=dict)
    player_list: Mapped[list] = mapped_column(JSON, default=list)
