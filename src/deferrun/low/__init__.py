"""
Low level representation of a deferred run -- not expected to be user facing.

Stabilises the contract between configuration sources (files, cli, code) and
the runner itself: pydantic models that describe a job and the runner knobs,
and the lowering of those into a wired runner.
"""
