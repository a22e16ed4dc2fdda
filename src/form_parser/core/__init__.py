"""
Core orchestration for ``form_parser``: load-scoped build context, error
kinds, and the load pipeline.
"""
