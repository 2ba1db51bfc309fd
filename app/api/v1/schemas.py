from pydantic import BaseModel, Field


FieldScalarSchema = str | int | float | bool


class FieldDependencySchema(BaseModel):
    on_field_name: str
    on_value: str


class FieldDefinitionSchema(BaseModel):
    id: str
    name: str
    label: str
    type: str
    required: bool
    options: list[str] = Field(default_factory=list)
    display_order: int
    depends_on: FieldDependencySchema | None = None
    placeholder: str | None = None
    min_value: float | None = None
    max_value: float | None = None


class ServiceDefinitionSchema(BaseModel):
    id: str
    name: str
    code: str
    description: str
    category_id: str
    has_additional_fields: bool
    fields: list[FieldDefinitionSchema] = Field(default_factory=list)


class ServiceCategorySchema(BaseModel):
    id: str
    name: str
    code: str
    description: str
    services: list[ServiceDefinitionSchema] = Field(default_factory=list)


class CatalogResponseSchema(BaseModel):
    categories: list[ServiceCategorySchema]
    warnings: list[str] = Field(default_factory=list)


class RequestFormSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    identification: str = ""
    project_name: str = ""
    description: str = ""
    location: str = ""


class RequestFormUpdateSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    identification: str | None = None
    project_name: str | None = None
    description: str | None = None
    location: str | None = None


class FieldValueSchema(BaseModel):
    field_id: str
    value: FieldScalarSchema


class ServiceInstanceSchema(BaseModel):
    instance_id: str
    quantity: int
    additional_data: list[FieldValueSchema] = Field(default_factory=list)
    notes: str = ""


class SelectedServiceSchema(BaseModel):
    service_id: str
    service_name: str
    service_description: str
    category_name: str | None = None
    has_additional_fields: bool
    total_quantity: int
    instances: list[ServiceInstanceSchema]


class SessionSchema(BaseModel):
    session_id: str
    form: RequestFormSchema
    selected_services: list[SelectedServiceSchema]
    has_draft: bool = False


class AddSimpleServiceSchema(BaseModel):
    service_id: str
    quantity: int = Field(default=1, ge=1)


class InstanceUpdateSchema(BaseModel):
    quantity: int | None = Field(default=None, ge=1)
    notes: str | None = None


class SetFieldValueSchema(BaseModel):
    value: FieldScalarSchema | None = None


class NotesSchema(BaseModel):
    notes: str = ""


class OpenDraftSchema(BaseModel):
    service_id: str
    instance_id: str | None = None


class DraftInstanceSchema(ServiceInstanceSchema):
    visible_field_ids: list[str] = Field(default_factory=list)


class DraftSchema(BaseModel):
    service_id: str
    editing: bool
    instances: list[DraftInstanceSchema]


class DraftSaveResponseSchema(BaseModel):
    saved: bool
    errors: dict[str, dict[str, str]] = Field(default_factory=dict)
    session: SessionSchema


class ValidationErrorsSchema(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


class ReviewFieldSchema(BaseModel):
    field_id: str
    label: str
    display_value: str


class ReviewInstanceSchema(BaseModel):
    position: int
    quantity: int
    fields: list[ReviewFieldSchema]
    notes: str


class ReviewServiceSchema(BaseModel):
    service_id: str
    name: str
    description: str
    total_quantity: int
    instances: list[ReviewInstanceSchema]


class ReviewCategorySchema(BaseModel):
    name: str
    services: list[ReviewServiceSchema]


class ReviewResponseSchema(BaseModel):
    categories: list[ReviewCategorySchema]


class PayloadInstanceSchema(BaseModel):
    quantity: int
    additional_data: list[FieldValueSchema]
    notes: str


class PayloadServiceSchema(BaseModel):
    service_id: str
    instances: list[PayloadInstanceSchema]


class PayloadSchema(BaseModel):
    form: RequestFormSchema
    services: list[PayloadServiceSchema]


class SubmitResponseSchema(BaseModel):
    request_id: str
