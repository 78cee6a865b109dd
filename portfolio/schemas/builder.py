# portfolio/schemas/builder.py
"""
Visual builder document schema.

A canvas is a list of elements. Every element carries a ``type`` tag that
selects its props model, so a ``heading`` always has ``content``/``level``,
an ``image`` always has ``src``/``alt`` and so on. Unknown types are rejected
at the API boundary.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from portfolio.schemas.base import CamelModel

ElementType = Literal[
    "section", "container", "row", "column",
    "heading", "paragraph", "image", "button", "link",
    "form", "video", "carousel", "tabs", "accordion",
]


# ---- Props per element kind ----
class NoProps(CamelModel):
    pass


class HeadingProps(CamelModel):
    content: str = "Heading"
    level: int = Field(2, ge=1, le=6)


class ParagraphProps(CamelModel):
    content: str = "This is a paragraph of text. Double-click to edit."


class ImageProps(CamelModel):
    src: str = "https://via.placeholder.com/200x150"
    alt: str = "Placeholder image"


class ButtonProps(CamelModel):
    content: str = "Button"
    href: Optional[str] = None


class LinkProps(CamelModel):
    content: str = "Link"
    href: str = "#"


class FormField(CamelModel):
    name: str = Field(..., min_length=1)
    label: str = ""
    input_type: Literal["text", "email", "textarea", "number", "checkbox"] = "text"
    required: bool = False


class FormProps(CamelModel):
    action: Optional[str] = None
    submit_label: str = "Submit"
    fields: List[FormField] = Field(default_factory=list)


class VideoProps(CamelModel):
    src: str = ""
    autoplay: bool = False
    controls: bool = True


class CarouselProps(CamelModel):
    images: List[str] = Field(default_factory=list)
    interval_ms: int = Field(5000, ge=0)


class PanelItem(CamelModel):
    title: str = ""
    content: str = ""


class PanelProps(CamelModel):
    items: List[PanelItem] = Field(default_factory=list)


# ---- Elements ----
class ElementBase(CamelModel):
    id: str = Field(..., min_length=1)
    parent: Optional[str] = None
    styles: Dict[str, str] = Field(default_factory=dict)
    children: List["CanvasElement"] = Field(default_factory=list)


class SectionElement(ElementBase):
    type: Literal["section"] = "section"
    props: NoProps = Field(default_factory=NoProps)


class ContainerElement(ElementBase):
    type: Literal["container"] = "container"
    props: NoProps = Field(default_factory=NoProps)


class RowElement(ElementBase):
    type: Literal["row"] = "row"
    props: NoProps = Field(default_factory=NoProps)


class ColumnElement(ElementBase):
    type: Literal["column"] = "column"
    props: NoProps = Field(default_factory=NoProps)


class HeadingElement(ElementBase):
    type: Literal["heading"] = "heading"
    props: HeadingProps = Field(default_factory=HeadingProps)


class ParagraphElement(ElementBase):
    type: Literal["paragraph"] = "paragraph"
    props: ParagraphProps = Field(default_factory=ParagraphProps)


class ImageElement(ElementBase):
    type: Literal["image"] = "image"
    props: ImageProps = Field(default_factory=ImageProps)


class ButtonElement(ElementBase):
    type: Literal["button"] = "button"
    props: ButtonProps = Field(default_factory=ButtonProps)


class LinkElement(ElementBase):
    type: Literal["link"] = "link"
    props: LinkProps = Field(default_factory=LinkProps)


class FormElement(ElementBase):
    type: Literal["form"] = "form"
    props: FormProps = Field(default_factory=FormProps)


class VideoElement(ElementBase):
    type: Literal["video"] = "video"
    props: VideoProps = Field(default_factory=VideoProps)


class CarouselElement(ElementBase):
    type: Literal["carousel"] = "carousel"
    props: CarouselProps = Field(default_factory=CarouselProps)


class TabsElement(ElementBase):
    type: Literal["tabs"] = "tabs"
    props: PanelProps = Field(default_factory=PanelProps)


class AccordionElement(ElementBase):
    type: Literal["accordion"] = "accordion"
    props: PanelProps = Field(default_factory=PanelProps)


CanvasElement = Annotated[
    Union[
        SectionElement, ContainerElement, RowElement, ColumnElement,
        HeadingElement, ParagraphElement, ImageElement, ButtonElement, LinkElement,
        FormElement, VideoElement, CarouselElement, TabsElement, AccordionElement,
    ],
    Field(discriminator="type"),
]

ELEMENT_MODELS = {
    "section": SectionElement,
    "container": ContainerElement,
    "row": RowElement,
    "column": ColumnElement,
    "heading": HeadingElement,
    "paragraph": ParagraphElement,
    "image": ImageElement,
    "button": ButtonElement,
    "link": LinkElement,
    "form": FormElement,
    "video": VideoElement,
    "carousel": CarouselElement,
    "tabs": TabsElement,
    "accordion": AccordionElement,
}

for _model in (ElementBase, *ELEMENT_MODELS.values()):
    _model.model_rebuild()


# ---- Theme ----
class ThemeColors(CamelModel):
    primary: str = "#3b82f6"
    secondary: str = "#10b981"
    background: str = "#ffffff"
    text: str = "#1f2937"


class ThemeTypography(CamelModel):
    heading_font: str = "Inter"
    body_font: str = "Inter"
    base_size: int = Field(16, ge=8, le=48)
    scale: float = Field(1.2, ge=1.0, le=2.0)


class ThemeSpacing(CamelModel):
    base_padding: int = Field(16, ge=0)
    base_margin: int = Field(16, ge=0)
    section_gap: int = Field(64, ge=0)


class Theme(CamelModel):
    colors: ThemeColors = Field(default_factory=ThemeColors)
    typography: ThemeTypography = Field(default_factory=ThemeTypography)
    spacing: ThemeSpacing = Field(default_factory=ThemeSpacing)


# ---- Save / load ----
class BuilderSaveRequest(CamelModel):
    page_id: int
    elements: List[CanvasElement]
    theme: Theme
    # optimistic concurrency: reject the save if the stored version moved on
    expected_version: Optional[int] = Field(None, ge=0)


class BuilderDocument(CamelModel):
    id: int
    page_id: int
    elements: List[CanvasElement]
    theme: Theme
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BuilderResponse(BaseModel):
    success: bool = True
    data: BuilderDocument
