"""Form configuration declared inline in the hook call (no-inline-form-config)."""

from vertex_lint.domain.classifiers import NodeClassifier
from vertex_lint.domain.entities import Diagnostic
from vertex_lint.domain.nodes import Node, NodeType
from vertex_lint.domain.rules import BaseDetector, FileContext


class InlineFormConfigDetector(BaseDetector):
    """
    ``useForm({ defaultValues, resolver })`` should take a config built elsewhere.

    Only an object literal passed as the first argument is inspected, and only
    recognized form configuration keys count. ``hook_names`` extends the
    known form hooks. No fix: where the config should live is a judgment call.
    """

    rule_id = "no-inline-form-config"
    description = "Form hook configuration should be extracted from the hook call."
    message_ids = ("inlineFormConfig",)

    def __init__(self, context: FileContext) -> None:
        super().__init__(context)
        self._hooks = NodeClassifier.DEFAULT_FORM_HOOKS | set(self.option_list("hook_names"))

    def visit_callexpression(self, node: Node) -> list[Diagnostic]:
        if not NodeClassifier.is_form_hook(node, self._hooks):
            return []
        arguments = node.get("arguments") or []
        if not arguments or arguments[0].type != NodeType.OBJECT_EXPRESSION:
            return []
        config = arguments[0]
        keys = [
            key
            for key in (NodeClassifier.property_key_name(p) for p in config.get("properties") or [])
            if key is not None and NodeClassifier.is_form_config_property(key)
        ]
        if not keys:
            return []
        return [
            self.report(
                "inlineFormConfig",
                config,
                {"hookName": NodeClassifier.callee_name(node), "keys": ", ".join(keys)},
            )
        ]
