"""Loading schemas, operation documents and fragments from disk."""

import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable

from graphql import DocumentNode, FragmentDefinitionNode, GraphQLError, GraphQLSchema, build_schema, parse

from .errors import LoadError
from .fragments import LoadedFragment
from .logger import get_logger

log = get_logger("loader")

GRAPHQL_SUFFIXES = (".graphql", ".graphqls", ".gql")
ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def is_archive(path: Path) -> bool:
    return path.is_file() and path.name.lower().endswith(ARCHIVE_SUFFIXES)


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    name = archive_path.name.lower()
    if not name.endswith(ARCHIVE_SUFFIXES):
        raise LoadError(f"Unsupported archive format: {archive_path.name}")
    temp_dir = tempfile.mkdtemp()
    try:
        if name.endswith(".zip"):
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                zip_ref.extractall(temp_dir)
        else:
            with tarfile.open(archive_path, "r:gz") as tar_ref:
                tar_ref.extractall(temp_dir)
    except (zipfile.BadZipFile, tarfile.TarError, OSError) as e:
        shutil.rmtree(temp_dir)
        raise LoadError(f"Cannot extract {archive_path}: {e}") from e
    return temp_dir


def collect_graphql_files(path: Path) -> list[Path]:
    """A single file, or every GraphQL file below a directory, sorted."""
    if path.is_file():
        return [path]
    return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in GRAPHQL_SUFFIXES)


def _read(path: Path) -> str:
    try:
        return path.read_text()
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e


def load_schema(path: str | Path) -> GraphQLSchema:
    """Build a schema from a file, a directory of files, or an archive."""
    path = Path(path)
    temp_dir = None
    try:
        source_path = path
        if is_archive(path):
            log.info("Extracting archive %s", path.name)
            temp_dir = extract_archive(path)
            source_path = Path(temp_dir)

        files = collect_graphql_files(source_path)
        if not files:
            raise LoadError(f"No GraphQL schema files found in {path}")
        log.debug("Schema files: %s", [str(f) for f in files])
        sdl = "\n".join(_read(f) for f in files)
        try:
            return build_schema(sdl)
        except (GraphQLError, TypeError) as e:
            raise LoadError(f"Invalid schema in {path}: {e}") from e
    finally:
        if temp_dir:
            shutil.rmtree(temp_dir)


def load_document(path: str | Path) -> DocumentNode:
    """Parse one operation document."""
    path = Path(path)
    try:
        return parse(_read(path))
    except GraphQLError as e:
        raise LoadError(f"Error parsing {path.name}: {e}") from e


def load_documents(paths: Iterable[str | Path]) -> list[DocumentNode]:
    """Parse operation documents; directories contribute all their GraphQL files."""
    documents = []
    for path in map(Path, paths):
        if not path.exists():
            raise LoadError(f"Document path does not exist: {path}")
        for file_path in collect_graphql_files(path):
            documents.append(load_document(file_path))
    return documents


def _fragment_definitions(document: DocumentNode) -> list[FragmentDefinitionNode]:
    return [d for d in document.definitions if isinstance(d, FragmentDefinitionNode)]


def collect_fragments(
    documents: Iterable[DocumentNode],
    external_documents: Iterable[DocumentNode] = (),
) -> list[LoadedFragment]:
    """Document fragments first, then externally supplied ones."""
    fragments = [
        LoadedFragment.from_definition(node)
        for document in documents
        for node in _fragment_definitions(document)
    ]
    fragments.extend(
        LoadedFragment.from_definition(node, is_external=True)
        for document in external_documents
        for node in _fragment_definitions(document)
    )
    return fragments
