"""Sidebar navigation schemas."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class NavItemConfig(BaseModel):
    type: Literal["item"] = "item"
    id: str
    label: str
    icon: Optional[str] = None
    href: str
    permissions: Optional[List[str]] = Field(default=None, description="MODULE.ACTION references.")


class NavDropdownConfig(BaseModel):
    type: Literal["dropdown"] = "dropdown"
    id: str
    label: str
    icon: Optional[str] = None
    permissions: Optional[List[str]] = None
    children: List[NavItemConfig] = Field(default_factory=list)


class NavMasterConfig(BaseModel):
    type: Literal["master"] = "master"
    id: str
    label: str
    icon: Optional[str] = None
    href: str
    permissions: Optional[List[str]] = None
    children: List[NavItemConfig] = Field(default_factory=list)


class NavGroupConfig(BaseModel):
    type: Literal["group"] = "group"
    label: str
    children: List[
        Annotated[Union[NavItemConfig, NavDropdownConfig, NavMasterConfig], Field(discriminator="type")]
    ] = Field(default_factory=list)


NavigationConfig = Annotated[
    Union[NavItemConfig, NavDropdownConfig, NavMasterConfig, NavGroupConfig],
    Field(discriminator="type"),
]


class SidebarDocument(BaseModel):
    navigation: List[NavigationConfig] = Field(default_factory=list)


class NavItem(BaseModel):
    type: Literal["item"] = "item"
    id: str
    label: str
    icon: Optional[str] = None
    href: str
    permissions: Optional[List[int]] = None


class NavDropdown(BaseModel):
    type: Literal["dropdown"] = "dropdown"
    id: str
    label: str
    icon: Optional[str] = None
    permissions: Optional[List[int]] = None
    children: List[NavItem] = Field(default_factory=list)


class NavMaster(BaseModel):
    type: Literal["master"] = "master"
    id: str
    label: str
    icon: Optional[str] = None
    href: str
    permissions: Optional[List[int]] = None
    children: List[NavItem] = Field(default_factory=list)


class NavGroup(BaseModel):
    type: Literal["group"] = "group"
    label: str
    children: List[Annotated[Union[NavItem, NavDropdown, NavMaster], Field(discriminator="type")]] = Field(
        default_factory=list
    )


NavigationItem = Annotated[Union[NavItem, NavDropdown, NavMaster, NavGroup], Field(discriminator="type")]


class NavigationEntry(BaseModel):
    item: NavigationItem
    href: Optional[str] = None


class NavigationResponse(BaseModel):
    navigation: List[NavigationEntry]
