from pydantic import BaseModel

class UserRegister(BaseModel):
    fullName: str | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None

    def blank_fields(self) -> list[str]:
        return [name for name, value in self.model_dump().items() if value is None or value.strip() == ""]
