"""Raw response payloads leaking out of the service layer (no-response-data-return)."""

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node
from vertex_lint.domain.rules import BaseDetector, FileContext

DEFAULT_SERVICE_PATH_MARKER = "src/services/"


class ResponseDataReturnDetector(BaseDetector):
    """Flags ``return response.data`` (or ``?.data``) in service-layer files only."""

    rule_id = "no-response-data-return"
    description = "Service functions should transform responses instead of returning response.data."
    message_ids = ("directResponseDataReturn",)

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        marker = self.option_str("service_path_marker", DEFAULT_SERVICE_PATH_MARKER)
        self._active = NodeClassifier.matches_service_path(context.filename, marker)

    def visit_returnstatement(self, node: Node) -> list[Diagnostic]:
        if not self._active or not NodeClassifier.is_response_passthrough(node):
            return []
        return [self.report("directResponseDataReturn", node)]
