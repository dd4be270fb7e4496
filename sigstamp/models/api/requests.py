"""Command models for the discrete events of an editing session."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator


class LoadDocumentCommand(BaseModel):
    """A PDF was chosen by the user."""

    type: Literal["load_document"] = "load_document"
    data: bytes = Field(..., description="Raw PDF bytes")
    name: Optional[str] = Field(None, description="Original file name")


class PageRenderedCommand(BaseModel):
    """An external renderer finished drawing a page."""

    type: Literal["page_rendered"] = "page_rendered"
    page: int = Field(..., gt=0, description="Page number (1-based)")
    display_width: float = Field(..., description="Rendered width in pixels")
    display_height: float = Field(..., description="Rendered height in pixels")


class RenderPageCommand(BaseModel):
    """Render a page at the current zoom."""

    type: Literal["render_page"] = "render_page"
    page: int = Field(..., gt=0, description="Page number (1-based)")


class SetZoomCommand(BaseModel):
    """The zoom slider moved."""

    type: Literal["set_zoom"] = "set_zoom"
    zoom: float = Field(..., description="Requested zoom factor")


class PlaceCommand(BaseModel):
    """A rendered page was clicked with a signature ready.

    The signature comes either as raw PNG bytes or as the PNG data URL a
    drawing pad produces.
    """

    type: Literal["place"] = "place"
    page: int = Field(..., gt=0, description="Page number (1-based)")
    x: float = Field(..., description="Click x in display pixels")
    y: float = Field(..., description="Click y in display pixels")
    image: Optional[bytes] = Field(None, description="PNG bytes")
    image_data_url: Optional[str] = Field(None, description="PNG data URL")

    @model_validator(mode="after")
    def check_single_image_source(self) -> "PlaceCommand":
        if (self.image is None) == (self.image_data_url is None):
            raise ValueError("Provide exactly one of image or image_data_url")
        return self


class MoveCommand(BaseModel):
    """A signature was dragged."""

    type: Literal["move"] = "move"
    placement_id: str = Field(..., description="Placement identifier")
    x: float = Field(..., description="New left edge in display pixels")
    y: float = Field(..., description="New top edge in display pixels")


class ResizeCommand(BaseModel):
    """A signature was resized; the position changes with non top-left handles."""

    type: Literal["resize"] = "resize"
    placement_id: str = Field(..., description="Placement identifier")
    width: float = Field(..., description="New width in display pixels")
    height: float = Field(..., description="New height in display pixels")
    x: float = Field(..., description="New left edge in display pixels")
    y: float = Field(..., description="New top edge in display pixels")


class RemoveCommand(BaseModel):
    """A signature was deleted."""

    type: Literal["remove"] = "remove"
    placement_id: str = Field(..., description="Placement identifier")


class ListCommand(BaseModel):
    """List placements of one page, or of the whole document."""

    type: Literal["list"] = "list"
    page: Optional[int] = Field(None, gt=0, description="Page number (1-based)")


class ExportCommand(BaseModel):
    """Apply all signatures and hand out the signed document."""

    type: Literal["export"] = "export"


class ResetCommand(BaseModel):
    """Start over with an empty session."""

    type: Literal["reset"] = "reset"


Command = Annotated[
    Union[
        LoadDocumentCommand,
        PageRenderedCommand,
        RenderPageCommand,
        SetZoomCommand,
        PlaceCommand,
        MoveCommand,
        ResizeCommand,
        RemoveCommand,
        ListCommand,
        ExportCommand,
        ResetCommand,
    ],
    Field(discriminator="type"),
]

command_adapter = TypeAdapter(Command)
