"""Glue between the tessellator and a host scene.

The tessellator knows nothing about scenes. This module plays the part of
an engine component: it generates a mesh from its settings and hands it to
an entity's render slot, sharing it with the entity's collider when there
is one. Entities are duck-typed; anything with a ``mesh_filter`` attribute
(and optionally ``mesh_collider``) whose value has a writable ``mesh``
attribute will do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from surfmesh.config import TessellationSettings
from surfmesh.errors import HostWiringError
from surfmesh.mesh import Mesh
from surfmesh.surfaces import SurfaceFunction
from surfmesh.tessellator import generate

logger = logging.getLogger(__name__)


@dataclass
class MeshSlot:
    """Holds the mesh assigned to a renderer or collider."""

    mesh: Optional[Mesh] = None


@dataclass
class Entity:
    """Minimal scene entity with an optional render slot and collider."""

    name: str = "entity"
    mesh_filter: Optional[MeshSlot] = None
    mesh_collider: Optional[MeshSlot] = None


@dataclass
class SurfaceMeshComponent:
    """Generates a mesh for ``surface`` and attaches it to entities."""

    surface: SurfaceFunction
    settings: TessellationSettings = field(default_factory=TessellationSettings)

    def build(self) -> Mesh:
        settings = self.settings.validate()
        return generate(settings.subdivisions, self.surface, workers=settings.workers)

    def attach(self, entity) -> Mesh:
        """Generate a fresh mesh and assign it to ``entity``.

        Raises :class:`HostWiringError` if the entity has no render slot.
        """
        target = getattr(entity, "mesh_filter", None)
        if target is None:
            name = getattr(entity, "name", repr(entity))
            logger.error("entity %s has no mesh filter; cannot assign generated mesh", name)
            raise HostWiringError(f"entity {name} has no mesh filter to receive the mesh")

        mesh = self.build()
        target.mesh = mesh

        collider = getattr(entity, "mesh_collider", None)
        if collider is not None:
            collider.mesh = mesh
        logger.debug("attached %d-triangle mesh (collider: %s)",
                     mesh.triangle_count, collider is not None)
        return mesh


__all__ = ["MeshSlot", "Entity", "SurfaceMeshComponent"]
