import datetime as dt
import typing as t
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import EmailStr

from common.schema import OneToTwoFiftyFiveString, StrippedString
from members import models

MemberStatus = t.Literal["pending", "approved", "rejected"]


class MemberSchema(ModelSchema):
    handled_by_id: UUID | None = None

    class Meta:
        model = models.Member
        fields = [
            "id",
            "chinese_name",
            "english_name",
            "gender",
            "birthday",
            "phone",
            "email",
            "address",
            "emergency_name",
            "emergency_phone",
            "emergency_relation",
            "apply_date",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]


class MemberApplicationSchema(Schema):
    chinese_name: OneToTwoFiftyFiveString
    english_name: StrippedString = ""
    gender: models.Member.Gender
    birthday: dt.date | None = None
    phone: OneToTwoFiftyFiveString
    email: EmailStr
    address: StrippedString = ""
    emergency_name: StrippedString = ""
    emergency_phone: StrippedString = ""
    emergency_relation: StrippedString = ""
    notes: str | None = None


class MemberStatusUpdateSchema(Schema):
    status: str
    expected_status: MemberStatus | None = None
    expected_updated_at: dt.datetime | None = None


class SendVerificationCodeSchema(Schema):
    email: str = ""


class SendVerificationCodeResponse(Schema):
    ok: bool = True
    skipped: bool = False


class VerifyCodeSchema(Schema):
    email: str = ""
    code: str = ""


class VerifiedMemberSchema(Schema):
    name: str
    email: str
    token: str


class VerifyCodeResponse(Schema):
    success: bool = True
    data: VerifiedMemberSchema
