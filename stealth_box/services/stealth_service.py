"""
StealthBox - Stealth Payment Service
======================================
Service layer: mittente e destinatario sopra il core crittografico.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0

Il service non fa I/O: nodo/explorer e signer sono collaboratori esterni
descritti dai Protocol LedgerSource e WitnessSigner.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, Union

from stealth_box.config import StealthSettings, get_settings
from stealth_box.errors import CurveDecodeError, UnspendablePayloadError
from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.stealth.payload import StealthPayload, RegisterInput
from stealth_box.stealth.generator import PayloadGenerator, RecipientKey
from stealth_box.stealth.detector import PayloadDetector, DetectionResult
from stealth_box.stealth.witness import WitnessBuilder, WitnessDescriptor
from stealth_box.logging_setup import get_logger, PerformanceLogger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("services.stealth")


# Box del ledger (dict con boxId/additionalRegisters) o registri R4..R7 nudi
BoxLike = Union[Mapping[str, Any], RegisterInput]


# ============================================================================
# EXTERNAL COLLABORATORS
# ============================================================================

class LedgerSource(Protocol):
    """Fornisce box dal ledger (nodo o explorer)"""

    def get_box(self, box_id: str) -> Mapping[str, Any]:
        ...


class WitnessSigner(Protocol):
    """Costruisce e firma la transazione di spesa a partire dal witness"""

    def sign(self, box: Mapping[str, Any], witness: WitnessDescriptor) -> Any:
        ...


# ============================================================================
# RESULT TYPES
# ============================================================================

@dataclass(frozen=True)
class StealthPayment:
    """
    Output lato mittente per il transaction builder esterno.

    Attributes:
        payload: Stealth payload generato
        registers: Registri R4..R7 (hex, type tag incluso)
        ergo_tree: Script di protezione della box
    """
    payload: StealthPayload
    registers: Dict[str, str]
    ergo_tree: str

    def to_dict(self) -> dict:
        return {
            "ergoTree": self.ergo_tree,
            "additionalRegisters": dict(self.registers),
        }


@dataclass(frozen=True)
class StealthMatch:
    """Box riconosciuta come spendibile durante una scansione"""
    payload: StealthPayload
    box_id: Optional[str] = None
    box: Optional[Mapping[str, Any]] = field(default=None, repr=False, compare=False)


# ============================================================================
# STEALTH SERVICE
# ============================================================================

class StealthService:
    """
    Service per stealth payments.

    Features:
    - Payment generation (mittente)
    - Box scanning (destinatario)
    - Witness preparation con controllo di spendibilità

    Examples:
        >>> service = StealthService()
        >>> payment = service.create_payment(receiver.public_hex())
        >>> matches = service.scan_boxes(boxes, receiver)
        >>> witness = service.prepare_spend(matches[0].payload, receiver)
    """

    def __init__(self, config: Optional[StealthSettings] = None):
        """
        Initialize stealth service.

        Args:
            config: Settings (default: singleton get_settings())
        """
        self.config = config or get_settings()
        self.curve = self.config.get_curve()

        expected_tag = self.config.expected_register_tag()

        self.generator = PayloadGenerator(
            curve=self.curve,
            max_scalar_draws=self.config.max_scalar_draws
        )
        self.detector = PayloadDetector(curve=self.curve, expected_tag=expected_tag)
        self.witness_builder = WitnessBuilder(curve=self.curve, expected_tag=expected_tag)

        logger.debug(
            "Stealth service initialized",
            extra_data={"curve": self.curve.name}
        )

    # ========================================================================
    # SENDER
    # ========================================================================

    def receiver_public_key(self, keypair: StealthKeyPair) -> str:
        """Chiave pubblica da condividere con i mittenti (hex compresso)"""
        return keypair.public_hex()

    def create_payment(self, recipient: RecipientKey) -> StealthPayment:
        """
        Crea stealth payment verso la chiave pubblica del destinatario.

        Args:
            recipient: Chiave pubblica U (Point, 33 bytes o hex)

        Returns:
            StealthPayment: Registri e script per la box di output
        """
        payload = self.generator.generate(recipient)

        payment = StealthPayment(
            payload=payload,
            registers=payload.register_map(self.config.register_type_tag),
            ergo_tree=self.config.stealth_ergo_tree,
        )

        logger.info(
            "Created stealth payment",
            extra_data={"r4": payment.registers["R4"][:18]}
        )

        return payment

    # ========================================================================
    # RECEIVER
    # ========================================================================

    def _split_box(self, box: BoxLike) -> Tuple[Optional[str], RegisterInput, Optional[Mapping]]:
        if isinstance(box, Mapping) and "additionalRegisters" in box:
            return box.get("boxId"), box["additionalRegisters"], box
        return None, box, None

    def check_box(self, box: BoxLike, keypair: StealthKeyPair) -> DetectionResult:
        """Esito dettagliato per una singola box"""
        _, registers, _ = self._split_box(box)
        return self.detector.inspect(registers, keypair.secret)

    def scan_boxes(
        self,
        boxes: Iterable[BoxLike],
        keypair: StealthKeyPair,
        only_stealth_tree: bool = True
    ) -> List[StealthMatch]:
        """
        Scansiona box per trovare quelle spendibili da keypair.

        Box malformate o estranee sono saltate senza errori.

        Args:
            boxes: Box del ledger o registri nudi
            keypair: Keypair del destinatario
            only_stealth_tree: Salta box con ergoTree diverso dallo script stealth

        Returns:
            List[StealthMatch]: Box spendibili
        """
        found: List[StealthMatch] = []
        scanned = 0
        malformed = 0

        with PerformanceLogger(logger, "scan_boxes"):
            for box in boxes:
                box_id, registers, raw_box = self._split_box(box)

                if (
                    only_stealth_tree
                    and raw_box is not None
                    and "ergoTree" in raw_box
                    and raw_box["ergoTree"] != self.config.stealth_ergo_tree
                ):
                    continue

                scanned += 1

                try:
                    payload = StealthPayload.from_registers(
                        registers, self.curve, self.config.expected_register_tag()
                    )
                except CurveDecodeError:
                    malformed += 1
                    continue

                if self.detector.is_spendable(payload, keypair.secret):
                    found.append(StealthMatch(payload=payload, box_id=box_id, box=raw_box))

                    logger.info(
                        "Found stealth box",
                        extra_data={"box_id": (box_id or "unknown")[:16]}
                    )

        logger.info(
            f"Scan complete: found {len(found)} of {scanned} boxes",
            extra_data={"found": len(found), "scanned": scanned, "malformed": malformed}
        )

        return found

    def prepare_spend(self, box: BoxLike, keypair: StealthKeyPair) -> WitnessDescriptor:
        """
        Verifica spendibilità e costruisce il witness.

        Raises:
            UnspendablePayloadError: Se la box non è spendibile da keypair
        """
        box_id, registers, _ = self._split_box(box)

        if isinstance(registers, StealthPayload):
            payload = registers
        else:
            try:
                payload = StealthPayload.from_registers(
                    registers, self.curve, self.config.expected_register_tag()
                )
            except CurveDecodeError:
                raise self._unspendable(box_id, DetectionResult.MALFORMED)

        result = self.detector.inspect(payload, keypair.secret)
        if result is not DetectionResult.SPENDABLE:
            raise self._unspendable(box_id, result)

        return self.witness_builder.build(payload, keypair.secret)

    def claim(
        self,
        box_id: str,
        keypair: StealthKeyPair,
        ledger: LedgerSource,
        signer: WitnessSigner
    ) -> Any:
        """
        Recupera box dal ledger, prepara il witness e lo consegna al signer.

        Returns:
            Risultato opaco del signer (tipicamente la tx firmata)
        """
        box = ledger.get_box(box_id)
        witness = self.prepare_spend(box, keypair)

        logger.info("Stealth box spendable, handing witness to signer",
                    extra_data={"box_id": box_id[:16]})

        return signer.sign(box, witness)

    def _unspendable(self, box_id: Optional[str], result: DetectionResult) -> UnspendablePayloadError:
        logger.warning(
            "Stealth box is not spendable",
            extra_data={"box_id": (box_id or "unknown")[:16], "result": result.value}
        )
        return UnspendablePayloadError(
            f"Stealth box is not spendable: {result.value}",
            code="NOT_SPENDABLE",
            details={"box_id": box_id, "result": result.value}
        )


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "StealthService",
    "StealthPayment",
    "StealthMatch",
    "LedgerSource",
    "WitnessSigner",
]
