"""About page cards: main cards, each owning an ordered list of sub cards."""

import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class AboutMainCard(Base):
    __tablename__ = "about_main_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[str] = mapped_column(String(255), server_default="")
    layout_type: Mapped[str] = mapped_column(
        String(20), server_default="default", comment="default, grid or flex"
    )
    custom_css: Mapped[str] = mapped_column(Text, default="")
    sort_order: Mapped[int] = mapped_column(Integer, server_default="0")
    is_enabled: Mapped[bool] = mapped_column(Boolean, server_default="1")
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP")
    )

    sub_cards: Mapped[list["AboutSubCard"]] = relationship(
        "AboutSubCard",
        back_populates="main_card",
        order_by="AboutSubCard.sort_order",
        passive_deletes=True,
    )


Index("idx_main_cards_sort", AboutMainCard.sort_order)


class AboutSubCard(Base):
    __tablename__ = "about_sub_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    main_card_id: Mapped[int] = mapped_column(
        ForeignKey("about_main_cards.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    icon: Mapped[str] = mapped_column(String(255), server_default="")
    link_url: Mapped[str] = mapped_column(String(1024), server_default="")
    layout_type: Mapped[str] = mapped_column(String(20), server_default="default")
    custom_css: Mapped[str] = mapped_column(Text, default="")
    sort_order: Mapped[int] = mapped_column(Integer, server_default="0")
    is_enabled: Mapped[bool] = mapped_column(Boolean, server_default="1")
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP")
    )

    main_card: Mapped["AboutMainCard"] = relationship(
        "AboutMainCard", back_populates="sub_cards"
    )


Index("idx_sub_cards_main_id", AboutSubCard.main_card_id)
Index("idx_sub_cards_sort", AboutSubCard.sort_order)
