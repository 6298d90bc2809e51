# backend/constructiq/services/documents.py
from collections import defaultdict
from typing import Dict, List, Optional, Set

from pydantic import ValidationError

from ..errors import InvalidOperation
from ..schemas.document import Document, DocumentCreate, DocumentType, FilePayload
from ..utils.logging import service_logger
from .store import EntityStore, validation_failure

COPY_SUFFIX = " (copy)"


class DocumentTree:
    """Folder/file hierarchy of a project, linked through parent_id.

    Structural operations build a parent -> children index once per call
    rather than rescanning the collection at every level.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    # Reads

    def nodes(self, project_id: str) -> List[Document]:
        return self.store.where("documents", project_id=project_id)

    def get(self, document_id: Optional[str]) -> Optional[Document]:
        return self.store.get("documents", document_id)

    def _children_index(self, project_id: str) -> Dict[Optional[str], List[Document]]:
        index: Dict[Optional[str], List[Document]] = defaultdict(list)
        for node in self.nodes(project_id):
            index[node.parent_id or None].append(node)
        return index

    def list_children(self, project_id: str, folder_id: Optional[str] = None) -> List[Document]:
        """Exactly one level below folder_id (None is the project root)"""
        return [node for node in self.nodes(project_id) if (node.parent_id or None) == folder_id]

    def descendants(self, document_id: str) -> List[Document]:
        """Every node below document_id, parents before their children"""
        node = self.get(document_id)
        if node is None:
            return []
        index = self._children_index(node.project_id)
        found: List[Document] = []
        seen: Set[str] = {node.id}
        frontier = [node.id]
        while frontier:
            next_frontier = []
            for parent_id in frontier:
                for child in index.get(parent_id, []):
                    if child.id in seen:
                        continue
                    seen.add(child.id)
                    found.append(child)
                    next_frontier.append(child.id)
            frontier = next_frontier
        return found

    def breadcrumb(self, folder_id: Optional[str]) -> List[Document]:
        """Path from the root down to folder_id; stops if a parent repeats"""
        path: List[Document] = []
        seen: Set[str] = set()
        current = self.get(folder_id)
        while current is not None and current.id not in seen:
            seen.add(current.id)
            path.append(current)
            current = self.get(current.parent_id)
        if current is not None:
            service_logger.warning("Cycle in document tree", extra={"document_id": current.id})
        path.reverse()
        return path

    # Validation

    def _check_parent(self, project_id: str, parent_id: Optional[str]) -> None:
        if parent_id is None:
            return
        parent = self.get(parent_id)
        if parent is None:
            raise InvalidOperation(f"Parent folder {parent_id} does not exist")
        if parent.project_id != project_id:
            raise InvalidOperation("Parent folder belongs to another project")
        if not parent.is_folder:
            raise InvalidOperation(f"{parent.name} is not a folder")

    def _check_not_within(self, node: Document, parent_id: Optional[str]) -> None:
        if parent_id is None:
            return
        if parent_id == node.id or parent_id in {d.id for d in self.descendants(node.id)}:
            raise InvalidOperation(f"Cannot place {node.name} inside itself")

    # Mutations

    async def add(
            self,
            project_id: str,
            parent_id: Optional[str],
            name: str,
            type: DocumentType,
            file_data: Optional[FilePayload] = None,
    ) -> Document:
        """Create a node; sibling names may repeat"""
        try:
            data = DocumentCreate(
                project_id=project_id,
                parent_id=parent_id or None,
                name=name,
                type=type,
                file_data=file_data,
            )
        except ValidationError as e:
            raise validation_failure(e, "Document") from e
        self._check_parent(project_id, data.parent_id)
        document = await self.store.add("documents", data.model_dump(mode="json", by_alias=True))
        service_logger.info("Document created", extra={
            "document_id": document.id,
            "project_id": project_id,
            "document_type": document.type.value,
        })
        return document

    async def rename(self, document_id: str, name: str) -> Optional[Document]:
        return await self.store.update("documents", document_id, {"name": name})

    async def move(self, document_id: str, parent_id: Optional[str]) -> Optional[Document]:
        """Re-parent a single node; its subtree follows implicitly"""
        node = self.get(document_id)
        if node is None:
            return None
        parent_id = parent_id or None
        self._check_parent(node.project_id, parent_id)
        self._check_not_within(node, parent_id)

        moved = await self.store.update("documents", document_id, {"parent_id": parent_id})
        service_logger.info("Document moved", extra={"document_id": document_id, "parent_id": parent_id})
        return moved

    async def delete(self, document_id: str) -> List[Document]:
        """Remove a node and its whole subtree; returns what was removed"""
        node = self.get(document_id)
        if node is None:
            return []
        ids = [node.id] + [d.id for d in self.descendants(node.id)]
        async with self.store.batch():
            removed = await self.store.delete_many("documents", ids)

        service_logger.info("Document subtree deleted", extra={
            "document_id": document_id,
            "removed_count": len(removed),
        })
        return removed

    async def copy(self, document_id: str, parent_id: Optional[str]) -> List[Document]:
        """Deep-copy a subtree under parent_id; returns the clones, root first"""
        source = self.get(document_id)
        if source is None:
            return []
        parent_id = parent_id or None
        self._check_parent(source.project_id, parent_id)
        self._check_not_within(source, parent_id)

        index = self._children_index(source.project_id)
        clones: List[Document] = []
        visited: Set[str] = set()

        async def clone(node: Document, new_parent_id: Optional[str], name: str) -> None:
            visited.add(node.id)
            copy = await self.store.add("documents", {
                "project_id": node.project_id,
                "parent_id": new_parent_id,
                "name": name,
                "type": node.type.value,
                "file_data": node.file_data.model_dump(mode="json", by_alias=True) if node.file_data else None,
            })
            clones.append(copy)
            for child in index.get(node.id, []):
                if child.id in visited:
                    continue
                await clone(child, copy.id, child.name)

        async with self.store.batch():
            await clone(source, parent_id, f"{source.name}{COPY_SUFFIX}")

        service_logger.info("Document subtree copied", extra={
            "document_id": document_id,
            "copy_id": clones[0].id,
            "copied_count": len(clones),
        })
        return clones
