"""Resource, listener and thread leaks within a single method."""

import re

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource, MethodDeclaration
from devsync.schemas.detector_config import DetectorOptions

RESOURCE_TYPE = re.compile(
    r".*(Stream|Reader|Writer|Connection|Socket|Channel|Statement|ResultSet|Scanner|Buffer)"
)
LISTENER_ADD = re.compile(r"add.*Listener|register.*")
LISTENER_REMOVE = re.compile(r"remove.*Listener|unregister.*")
THREAD_STOP = {"shutdown", "shutdownNow", "interrupt"}


class MemoryLeakDetector(Detector):
    """Pairs opening calls with closing calls inside one method body.

    A try-with-resources block elsewhere in the method does not exempt
    resources that are opened outside of it.
    """

    name = "MemoryLeakDetector"
    kind = DetectorKind.MEMORY_LEAK

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        issues = []
        for method in source.unit.methods:
            if method.is_constructor or not method.has_body:
                continue
            issues.extend(self._unclosed_resources(source, method))
            issues.extend(self._listener_leaks(source, method))
            issues.extend(self._thread_leaks(source, method))
        return sorted(issues, key=lambda issue: issue.line)

    def _unclosed_resources(self, source: JavaSource, method: MethodDeclaration) -> list[Issue]:
        closed = {call.receiver for call in method.calls if call.name == "close"}
        issues = []
        reported = set()
        for creation in method.creations:
            variable = creation.variable
            if not variable or variable in closed or variable in reported:
                continue
            if not RESOURCE_TYPE.fullmatch(creation.type_name):
                continue
            reported.add(variable)
            issues.append(
                self.issue(
                    source,
                    creation.line,
                    Severity.CRITICAL,
                    f"Resource '{variable}' in method '{method.name}' may not be closed",
                    "Use try-with-resources or ensure close() is called in finally block",
                    "Unclosed resources like streams, connections, or readers can cause memory "
                    "leaks as they hold references and prevent garbage collection",
                )
            )
        return issues

    def _listener_leaks(self, source: JavaSource, method: MethodDeclaration) -> list[Issue]:
        added = [call for call in method.calls if LISTENER_ADD.fullmatch(call.name)]
        removed = any(LISTENER_REMOVE.fullmatch(call.name) for call in method.calls)
        if not added or removed:
            return []
        return [
            self.issue(
                source,
                added[0].line,
                Severity.HIGH,
                f"Listener registered in '{method.name}' but never removed",
                "Remove listener in cleanup/dispose method or use weak references",
                "Registered listeners hold strong references to objects, preventing garbage "
                "collection even when objects are no longer needed",
            )
        ]

    def _thread_leaks(self, source: JavaSource, method: MethodDeclaration) -> list[Issue]:
        if any(call.name in THREAD_STOP for call in method.calls):
            return []
        started = [
            creation.line
            for creation in method.creations
            if creation.type_name == "Thread" or "Executor" in creation.type_name
        ]
        started.extend(
            call.line
            for call in method.calls
            if call.receiver == "Executors" and call.name.startswith("new")
        )
        return [
            self.issue(
                source,
                line,
                Severity.MEDIUM,
                f"Thread/Executor created in '{method.name}' without shutdown mechanism",
                "Call shutdown() on executors, interrupt threads, or use daemon threads",
                "Threads that are not properly terminated continue running and hold references "
                "to objects, preventing garbage collection",
            )
            for line in sorted(started)
        ]
