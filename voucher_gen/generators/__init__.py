"""Recharge card generators."""

from voucher_gen.generators.batch import CardBatchGenerator
from voucher_gen.generators.codes import CodeGenerator

__all__ = ["CardBatchGenerator", "CodeGenerator"]
