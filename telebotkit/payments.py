"""Invoices, payments, shipping and currencies."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .media import Photo


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass
class ShippingAddress:
    """A shipping address."""

    country_code: str = ""
    state: str = ""
    city: str = ""
    street_line1: str = ""
    street_line2: str = ""
    post_code: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShippingAddress":
        return cls(
            country_code=data.get("country_code", ""),
            state=data.get("state", ""),
            city=data.get("city", ""),
            street_line1=data.get("street_line1", ""),
            street_line2=data.get("street_line2", ""),
            post_code=data.get("post_code", ""),
        )


@dataclass
class ShippingQuery:
    """An incoming shipping query."""

    sender: Optional[Mapping[str, Any]] = None
    id: str = ""
    payload: str = ""
    address: ShippingAddress = field(default_factory=ShippingAddress)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShippingQuery":
        return cls(
            sender=data.get("from"),
            id=data.get("id", ""),
            payload=data.get("invoice_payload", ""),
            address=ShippingAddress.from_dict(data.get("shipping_address") or {}),
        )


@dataclass
class Price:
    """A portion of the price, in the smallest units of the currency."""

    label: str = ""
    amount: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "amount": self.amount}


def _prices(items: Any) -> list[Price]:
    return [Price(label=p.get("label", ""), amount=p.get("amount", 0)) for p in items or []]


@dataclass
class ShippingOption:
    """One shipping option."""

    id: str = ""
    title: str = ""
    prices: list[Price] = field(default_factory=list)


@dataclass
class Order:
    """Information about an order."""

    name: str = ""
    phone_number: str = ""
    email: str = ""
    address: ShippingAddress = field(default_factory=ShippingAddress)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        return cls(
            name=data.get("name", ""),
            phone_number=data.get("phone_number", ""),
            email=data.get("email", ""),
            address=ShippingAddress.from_dict(data.get("shipping_address") or {}),
        )


@dataclass
class Payment:
    """A successful payment."""

    currency: str = ""
    total: int = 0
    payload: str = ""
    option_id: str = ""
    order: Order = field(default_factory=Order)
    telegram_charge_id: str = ""
    provider_charge_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Payment":
        return cls(
            currency=data.get("currency", ""),
            total=data.get("total_amount", 0),
            payload=data.get("invoice_payload", ""),
            option_id=data.get("shipping_option_id", ""),
            order=Order.from_dict(data.get("order_info") or {}),
            telegram_charge_id=data.get("telegram_payment_charge_id", ""),
            provider_charge_id=data.get("provider_payment_charge_id", ""),
        )


@dataclass
class PreCheckoutQuery:
    """An incoming pre-checkout query."""

    sender: Optional[Mapping[str, Any]] = None
    id: str = ""
    currency: str = ""
    payload: str = ""
    total: int = 0
    option_id: str = ""
    order: Order = field(default_factory=Order)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PreCheckoutQuery":
        return cls(
            sender=data.get("from"),
            id=data.get("id", ""),
            currency=data.get("currency", ""),
            payload=data.get("invoice_payload", ""),
            total=data.get("total_amount", 0),
            option_id=data.get("shipping_option_id", ""),
            order=Order.from_dict(data.get("order_info") or {}),
        )


@dataclass
class Invoice:
    """An invoice for a payment."""

    title: str = ""
    description: str = ""
    payload: str = ""
    currency: str = ""
    prices: list[Price] = field(default_factory=list)
    token: str = ""
    data: str = ""
    photo: Optional[Photo] = None
    photo_size: int = 0
    start: str = ""
    total: int = 0
    max_tip_amount: int = 0
    suggested_tip_amounts: list[int] = field(default_factory=list)
    need_name: bool = False
    need_phone_number: bool = False
    need_email: bool = False
    need_shipping_address: bool = False
    send_phone_number: bool = False
    send_email: bool = False
    flexible: bool = False

    def params(self) -> dict[str, str]:
        """Request parameters describing the invoice."""
        flags = {
            "need_name": self.need_name,
            "need_phone_number": self.need_phone_number,
            "need_email": self.need_email,
            "need_shipping_address": self.need_shipping_address,
            "send_phone_number_to_provider": self.send_phone_number,
            "send_email_to_provider": self.send_email,
            "is_flexible": self.flexible,
        }
        params = {
            "title": self.title,
            "description": self.description,
            "start_parameter": self.start,
            "payload": self.payload,
            "provider_token": self.token,
            "provider_data": self.data,
            "currency": self.currency,
            "max_tip_amount": str(self.max_tip_amount),
        }
        params.update({key: _dumps(bool(value)) for key, value in flags.items()})
        if self.photo is not None:
            if self.photo.file_url:
                params["photo_url"] = self.photo.file_url
            if self.photo_size > 0:
                params["photo_size"] = str(self.photo_size)
            if self.photo.width > 0:
                params["photo_width"] = str(self.photo.width)
            if self.photo.height > 0:
                params["photo_height"] = str(self.photo.height)
        if self.prices:
            params["prices"] = _dumps([p.to_dict() for p in self.prices])
        if self.suggested_tip_amounts:
            params["suggested_tip_amounts"] = _dumps(
                [str(n) for n in self.suggested_tip_amounts]
            )
        return params

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Invoice":
        photo = data.get("photo")
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            payload=data.get("payload", ""),
            currency=data.get("currency", ""),
            prices=_prices(data.get("prices")),
            token=data.get("provider_token", ""),
            data=data.get("provider_data", ""),
            photo=Photo.from_dict(photo) if photo else None,
            photo_size=data.get("photo_size", 0),
            start=data.get("start_parameter", ""),
            total=data.get("total_amount", 0),
            max_tip_amount=data.get("max_tip_amount", 0),
            suggested_tip_amounts=list(data.get("suggested_tip_amounts") or []),
            need_name=data.get("need_name", False),
            need_phone_number=data.get("need_phone_number", False),
            need_email=data.get("need_email", False),
            need_shipping_address=data.get("need_shipping_address", False),
            send_phone_number=data.get("send_phone_number_to_provider", False),
            send_email=data.get("send_email_to_provider", False),
            flexible=data.get("is_flexible", False),
        )


@dataclass
class Currency:
    """A currency supported for payments."""

    code: str = ""
    title: str = ""
    symbol: str = ""
    native: str = ""
    thousands_sep: str = ""
    decimal_sep: str = ""
    symbol_left: bool = False
    space_between: bool = False
    exp: int = 0
    min_amount: Any = None
    max_amount: Any = None

    def from_total(self, total: int) -> float:
        """Convert an amount in smallest units into currency units."""
        return total / 10**self.exp

    def to_total(self, total: float) -> int:
        """Convert whole currency units (fraction dropped) into smallest units."""
        return int(total) * int(10**self.exp)