from __future__ import annotations

from enum import Enum


class LedgerSection(str, Enum):
    BULK = "bulk"
    BOTTLED = "bottled"


class LedgerDirection(str, Enum):
    ADDITION = "addition"
    REMOVAL = "removal"


class TransactionType(str, Enum):
    # Part I Section A - bulk additions
    BULK_ON_HAND_BEGIN = "bulk_on_hand_begin"
    PRODUCED_FERMENTATION = "produced_fermentation"
    PRODUCED_SWEETENING = "produced_sweetening"
    PRODUCED_SPIRITS = "produced_spirits"
    PRODUCED_BLENDING = "produced_blending"
    PRODUCED_AMELIORATION = "produced_amelioration"
    RECEIVED_BOND = "received_bond"
    BOTTLED_DUMPED_BULK = "bottled_dumped_bulk"
    BULK_INVENTORY_GAIN = "bulk_inventory_gain"
    # Part I Section A - bulk removals
    BULK_BOTTLED = "bulk_bottled"
    BULK_REMOVED_TAXPAID = "bulk_removed_taxpaid"
    BULK_TRANSFERRED_BOND = "bulk_transferred_bond"
    BULK_EXPORTED = "bulk_exported"
    BULK_DESTROYED = "bulk_destroyed"
    BULK_DISTILLATION = "bulk_distillation"
    BULK_VINEGAR = "bulk_vinegar"
    BULK_TASTING = "bulk_tasting"
    BULK_LOSSES_OTHER = "bulk_losses_other"
    BULK_LOSSES_INVENTORY = "bulk_losses_inventory"
    # Part I Section B - bottled additions
    BOTTLED_ON_HAND_BEGIN = "bottled_on_hand_begin"
    BOTTLED_PRODUCED = "bottled_produced"
    BOTTLED_RECEIVED_BOND = "bottled_received_bond"
    BOTTLED_INVENTORY_GAIN = "bottled_inventory_gain"
    # Part I Section B - bottled removals
    BOTTLED_REMOVED_TAXPAID = "bottled_removed_taxpaid"
    BOTTLED_TRANSFERRED_BOND = "bottled_transferred_bond"
    BOTTLED_EXPORTED = "bottled_exported"
    BOTTLED_TASTING = "bottled_tasting"
    BOTTLED_BREAKAGE = "bottled_breakage"
    BOTTLED_DUMPED_TO_BULK = "bottled_dumped_to_bulk"

    @property
    def section(self) -> LedgerSection:
        return _META[self][0]

    @property
    def direction(self) -> LedgerDirection:
        return _META[self][1]

    @property
    def line(self) -> int:
        return _META[self][2]

    @property
    def label(self) -> str:
        return _META[self][3]

    @property
    def form_line(self) -> str:
        """Line reference as printed on the form, e.g. 'A-13' or 'B-2'."""
        prefix = "A" if self.section is LedgerSection.BULK else "B"
        return f"{prefix}-{self.line}"

    @property
    def is_opening_balance(self) -> bool:
        return self in (TransactionType.BULK_ON_HAND_BEGIN, TransactionType.BOTTLED_ON_HAND_BEGIN)


_B = LedgerSection.BULK
_P = LedgerSection.BOTTLED
_ADD = LedgerDirection.ADDITION
_REM = LedgerDirection.REMOVAL

_META: dict[TransactionType, tuple[LedgerSection, LedgerDirection, int, str]] = {
    TransactionType.BULK_ON_HAND_BEGIN: (_B, _ADD, 1, "On hand beginning of period"),
    TransactionType.PRODUCED_FERMENTATION: (_B, _ADD, 2, "Produced by fermentation"),
    TransactionType.PRODUCED_SWEETENING: (_B, _ADD, 3, "Produced by sweetening"),
    TransactionType.PRODUCED_SPIRITS: (_B, _ADD, 4, "Produced by wine spirits addition"),
    TransactionType.PRODUCED_BLENDING: (_B, _ADD, 5, "Produced by blending"),
    TransactionType.PRODUCED_AMELIORATION: (_B, _ADD, 6, "Produced by amelioration"),
    TransactionType.RECEIVED_BOND: (_B, _ADD, 7, "Received in bond"),
    TransactionType.BOTTLED_DUMPED_BULK: (_B, _ADD, 8, "Bottled wine dumped to bulk"),
    TransactionType.BULK_INVENTORY_GAIN: (_B, _ADD, 9, "Inventory gains"),
    TransactionType.BULK_BOTTLED: (_B, _REM, 13, "Bottled"),
    TransactionType.BULK_REMOVED_TAXPAID: (_B, _REM, 14, "Removed taxpaid"),
    TransactionType.BULK_TRANSFERRED_BOND: (_B, _REM, 15, "Transferred in bond"),
    TransactionType.BULK_EXPORTED: (_B, _REM, 16, "Exported"),
    TransactionType.BULK_DESTROYED: (_B, _REM, 17, "Destroyed"),
    TransactionType.BULK_DISTILLATION: (_B, _REM, 18, "Used for distillation"),
    TransactionType.BULK_VINEGAR: (_B, _REM, 19, "Vinegar stock"),
    TransactionType.BULK_TASTING: (_B, _REM, 20, "Tasting use"),
    TransactionType.BULK_LOSSES_OTHER: (_B, _REM, 29, "Losses (other)"),
    TransactionType.BULK_LOSSES_INVENTORY: (_B, _REM, 30, "Inventory losses"),
    TransactionType.BOTTLED_ON_HAND_BEGIN: (_P, _ADD, 1, "On hand beginning of period"),
    TransactionType.BOTTLED_PRODUCED: (_P, _ADD, 2, "Bottled"),
    TransactionType.BOTTLED_RECEIVED_BOND: (_P, _ADD, 5, "Received in bond"),
    TransactionType.BOTTLED_INVENTORY_GAIN: (_P, _ADD, 6, "Inventory gains"),
    TransactionType.BOTTLED_REMOVED_TAXPAID: (_P, _REM, 8, "Removed taxpaid"),
    TransactionType.BOTTLED_TRANSFERRED_BOND: (_P, _REM, 9, "Transferred in bond"),
    TransactionType.BOTTLED_EXPORTED: (_P, _REM, 10, "Exported"),
    TransactionType.BOTTLED_TASTING: (_P, _REM, 11, "Tasting use"),
    TransactionType.BOTTLED_BREAKAGE: (_P, _REM, 12, "Breakage/losses"),
    TransactionType.BOTTLED_DUMPED_TO_BULK: (_P, _REM, 13, "Dumped to bulk"),
}
