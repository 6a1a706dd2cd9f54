"""The registry of all types found in a set of protobuf files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from restgen.descriptors import FileDescriptor
from restgen.model import Enum, File, Message, RegistryError
from restgen.service import Service


@dataclass(eq=False)
class Registry:
    """Files, messages, enums and the service of one code generation request."""

    files: list[File] = field(default_factory=list)
    service: Optional[Service] = None
    root_file: Optional[File] = None
    messages: list[Message] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    package: str = ""

    @classmethod
    def from_files(cls, files: Iterable[FileDescriptor]) -> "Registry":
        """Register all files; the last one is the file whose service is generated."""
        reg = cls()
        for fd in files:
            file = File.from_descriptor(fd, reg)
            reg.add_file(file)
            for md in fd.messages:
                reg.add_message(Message(descriptor=md, package=fd.package, registry=reg))
            for ed in fd.enums:
                reg.add_enum(Enum.from_descriptor(ed, file, 0))

        if not reg.files:
            raise RegistryError("no files to generate code for")
        reg.root_file = reg.files[-1]
        reg._register_service(reg.root_file)
        return reg

    def _register_service(self, file: File) -> None:
        services = file.descriptor.services
        if not services:
            return
        if self.service is not None:
            raise RegistryError("Only one service in file supported")
        if file.descriptor.go_package is None:
            raise RegistryError(f"file {file.name} has no go_package option")

        svc = services[0]
        service = Service(
            descriptor=svc,
            registry=self,
            file=file,
            package=file.package,
            go_package=file.descriptor.go_package,
        )
        self.service = service
        self.root_file = file

        sm = svc.service_map
        if sm is None:
            return
        service.base_uri = sm.base_uri
        service.target_package = sm.target_package
        service.version = sm.version
        for method in svc.methods:
            service.register_method(method)

    def add_message(self, message: Message) -> None:
        """Add *message* unless one with the same qualified name is registered."""
        if all(str(m) != str(message) for m in self.messages):
            self.messages.append(message)

    def get_message(self, key: str) -> Optional[Message]:
        """The message with qualified name *key* (``.pkg.Name``), or None."""
        return next((m for m in self.messages if str(m) == key), None)

    def add_enum(self, enum: Enum) -> None:
        """Add *enum* unless one with the same qualified name is registered."""
        if all(str(e) != str(enum) for e in self.enums):
            self.enums.append(enum)

    def get_enum(self, name: str) -> Optional[Enum]:
        """The enum with plain or qualified name *name*, or None."""
        return next((e for e in self.enums if e.name == name or str(e) == name), None)

    def add_file(self, file: File) -> None:
        """Add *file* unless one of that name is registered."""
        if all(f.name != file.name for f in self.files):
            self.files.append(file)

    def get_file(self, key: str) -> Optional[File]:
        """The file named *key*, or None."""
        return next((f for f in self.files if f.name == key), None)