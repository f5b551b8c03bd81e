from pydantic import BaseModel, Field, field_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class SiteVisibilityRules(BaseModel):
    settings_nonce_action: str = "store-settings"
    saved_event_name: str = "site_visibility_saved"
    settings_url: str
    shop_permalink: str
    share_key_length: int = Field(default=32, ge=16, le=128)


class StorePagesRules(BaseModel):
    paths: list[str]
    prefixes: list[str] = Field(default_factory=list)

    @field_validator("paths", "prefixes")
    @classmethod
    def _absolute(cls, values: list[str]) -> list[str]:
        for value in values:
            if not value.startswith("/"):
                raise ValueError(f"store page path {value!r} must start with '/'")
        return values


class BannerRules(BaseModel):
    preview_query_param: str = "site-preview"
    rest_url_template: str = "/api/users/{user_id}"


class AuthRules(BaseModel):
    access_token_ttl_minutes: int
    nonce_ttl_minutes: int


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    log_level: str = "INFO"


class Rules(BaseModel):
    project: ProjectRules
    site_visibility: SiteVisibilityRules
    store_pages: StorePagesRules
    banner: BannerRules = Field(default_factory=BannerRules)
    auth: AuthRules
    ops: OpsRules = Field(default_factory=OpsRules)
