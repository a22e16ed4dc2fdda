from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from form_parser.config import get_config
from form_parser.core.exceptions import FormParserError, PipelineError
from form_parser.definition.builder import FormTree, build_form
from form_parser.definition.rehydrate import rehydrate
from form_parser.loader import load_definition, resolve_form_path
from form_parser.logging import get_logger
from form_parser.store import FormStore
from form_parser.utils import resolve_project_path


class FormPipeline:
    """
    Loads forms by code, rebuilding only when the definition changed.

        code -> definition file -> fingerprint
             -> stored tree with same fingerprint? rehydrate it
             -> otherwise build, validate, save

    No validation logic lives here.
    """

    def __init__(
        self,
        config=None,
        *,
        forms_dir: Optional[Union[str, Path]] = None,
        store: Optional[FormStore] = None,
    ):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger("core.pipeline")
        self.forms_dir = forms_dir or self.cfg.forms_dir

        if store is None:
            store = FormStore(resolve_project_path(self.cfg.store_dir))
        self.store = store

        # Path taken by the last load(): "stored" or "built".
        self.last_load: Optional[str] = None

    def is_stale(self, code: str, fingerprint: str) -> bool:
        return self.store.fingerprint(code) != fingerprint

    def load(self, code: str, *, force: bool = False) -> FormTree:
        self.log.info("Loading form %r", code)

        try:
            path = resolve_form_path(code, self.forms_dir)
            definition = load_definition(path)

            if not force and not self.is_stale(code, definition.fingerprint):
                root = self.store.load(code)
                if root is not None:
                    self.last_load = "stored"
                    self.log.info("Form %r unchanged, using stored tree", code)
                    return rehydrate(root)

            self.log.info("Form %r changed or not stored, rebuilding from %s", code, path)
            tree = build_form(
                definition.document,
                form_code=code,
                source=str(path),
                root_tag=self.cfg.root_tag,
                separator=self.cfg.separator,
            )
            self.store.save(tree.root, code=code, fingerprint=definition.fingerprint)
            self.last_load = "built"
            return tree

        except FormParserError:
            raise
        except Exception as exc:
            self.log.exception("Loading form %r failed", code)
            raise PipelineError(str(exc)) from exc
