from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", validation_alias=AliasChoices("_id", "id"))
    name: str
    email: str
    role: str
    user_name: str | None = Field(None, validation_alias=AliasChoices("userName", "user_name"))
    phone_number: str | None = Field(None, validation_alias=AliasChoices("phoneNumber", "phone_number"))
    outlet_ids: list[str] = Field(default_factory=list, validation_alias=AliasChoices("outletId", "outlet_ids"))
    is_active: bool | None = Field(None, validation_alias=AliasChoices("isActive", "is_active"))


class CreateUserRequest(BaseModel):
    name: str
    user_name: str
    email: str
    role: str
    phone_number: str
    password: str | None = None
    outlet_ids: list[str] | None = None


class UpdateUserRequest(BaseModel):
    name: str | None = None
    user_name: str | None = None
    email: str | None = None
    role: str | None = None
    phone_number: str | None = None
    password: str | None = None
    outlet_ids: list[str] | None = None
    is_active: bool | None = None
    is_blocked: bool | None = None


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str
