from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CatalogCategoryDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str
    code: str = ""
    name: str = ""


class CatalogFieldDTO(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | str
    field_name: str | None = Field(default=None, alias="fieldName")
    name: str | None = None
    label: str | None = None
    type: str = "text"
    required: bool = False
    options: list[str] | None = None
    depends_on_field: str | None = Field(default=None, alias="dependsOnField")
    depends_on_value: str | int | float | bool | None = Field(default=None, alias="dependsOnValue")
    display_order: int | None = Field(default=None, alias="displayOrder")
    placeholder: str | None = None
    min_value: float | None = Field(default=None, alias="min")
    max_value: float | None = Field(default=None, alias="max")

    def schema_name(self) -> str:
        return self.field_name or self.name or str(self.id)


class CatalogServiceRecordDTO(BaseModel):
    """One row of the backend ``GET /services`` listing."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | str
    name: str
    code: str = ""
    category_id: int | str | None = Field(default=None, alias="categoryId")
    category: CatalogCategoryDTO | None = None
    additional_fields: list[CatalogFieldDTO] | None = Field(default=None, alias="additionalFields")

    def category_ref(self) -> str | None:
        if self.category_id is not None and str(self.category_id).strip():
            return str(self.category_id).strip()
        if self.category is not None:
            return str(self.category.id).strip()
        return None
