from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    email: str = ""
    role: str = ""
    user_name: str | None = Field(None, validation_alias=AliasChoices("userName", "user_name"))
    phone_number: str | None = Field(None, validation_alias=AliasChoices("phoneNumber", "phone_number"))
    outlet_ids: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("outletId", "outlets", "outlet_ids"),
    )


class Session(BaseModel):
    """Credentials for one signed-in account, passed explicitly to every service call."""

    account: str = "default"
    token: str
    user: UserInfo | None = None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionStatus(BaseModel):
    account: str
    signed_in: bool
    user: UserInfo | None = None
    message: str
