"""Thin wrappers for wallet server messages that no cache owns.

Each method validates its arguments, sends one message, and returns the response envelope unchanged.
"""

import logging
from typing import Any

from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import BlockchainMethod, CommonMethod, CoreMethod, DLCMethod, NetworkMethod, WalletMethod
from dlcwallet.server.protocol import Response
from dlcwallet.validation import validate_boolean, validate_number, validate_string

logger = logging.getLogger(__name__)


def _file_args(fn_name: str, path: str, destination: str | None) -> list[str]:
    """Validate and collect the (path[, destination]) arguments of the *fromfile messages."""
    validate_string(path, fn_name, "path")
    args = [path]
    if destination is not None:
        validate_string(destination, fn_name, "destination")
        args.append(destination)
    return args


class WalletAPI:
    """Message functions of the wallet server grouped by route."""

    def __init__(self, client: ServerClient) -> None:
        """Initialize with the client all messages are sent through."""
        self._client = client

    # --- Common ---

    async def get_version(self) -> Response:
        """Server version, e.g. ``{"version": "1.9.9-224-6f0e5b3c"}``."""
        return await self._client.call(CommonMethod.GET_VERSION)

    async def zip_data_dir(self, path: str) -> Response:
        """Zip the server data directory to ``path`` on the server host."""
        validate_string(path, "zip_data_dir", "path")
        return await self._client.call(CommonMethod.ZIP_DATA_DIR, path)

    # --- Blockchain / network ---

    async def get_block_count(self) -> Response:
        """Current chain height."""
        return await self._client.call(BlockchainMethod.GET_BLOCK_COUNT)

    async def get_filter_count(self) -> Response:
        """Number of compact filters synced."""
        return await self._client.call(BlockchainMethod.GET_FILTER_COUNT)

    async def get_filter_header_count(self) -> Response:
        """Number of compact filter headers synced."""
        return await self._client.call(BlockchainMethod.GET_FILTER_HEADER_COUNT)

    async def get_block_header(self, block_hash: str) -> Response:
        """Header of the block with ``block_hash``."""
        validate_string(block_hash, "get_block_header", "block_hash")
        return await self._client.call(BlockchainMethod.GET_BLOCK_HEADER, block_hash)

    async def get_info(self) -> Response:
        """Node info: network, heights, sync state."""
        return await self._client.call(BlockchainMethod.GET_INFO)

    async def get_peers(self) -> Response:
        """Connected peers."""
        return await self._client.call(NetworkMethod.GET_PEERS)

    async def stop(self) -> Response:
        """Shut the server down."""
        logger.info("Requesting server stop")
        return await self._client.call(NetworkMethod.STOP)

    # --- Wallet ---

    async def is_empty(self) -> Response:
        """Whether the wallet has no transactions."""
        return await self._client.call(WalletMethod.IS_EMPTY)

    async def wallet_info(self) -> Response:
        """Wallet metadata."""
        return await self._client.call(WalletMethod.WALLET_INFO)

    async def get_balance(self, in_sats: bool) -> Response:  # noqa: FBT001
        """Total balance, as a string with a unit suffix."""
        validate_boolean(in_sats, "get_balance", "in_sats")
        return await self._client.call(WalletMethod.GET_BALANCE, in_sats)

    async def get_confirmed_balance(self, in_sats: bool) -> Response:  # noqa: FBT001
        """Confirmed balance, as a string with a unit suffix."""
        validate_boolean(in_sats, "get_confirmed_balance", "in_sats")
        return await self._client.call(WalletMethod.GET_CONFIRMED_BALANCE, in_sats)

    async def get_unconfirmed_balance(self, in_sats: bool) -> Response:  # noqa: FBT001
        """Unconfirmed balance, as a string with a unit suffix."""
        validate_boolean(in_sats, "get_unconfirmed_balance", "in_sats")
        return await self._client.call(WalletMethod.GET_UNCONFIRMED_BALANCE, in_sats)

    async def get_balances(self, in_sats: bool) -> Response:  # noqa: FBT001
        """Confirmed, unconfirmed and reserved balances."""
        validate_boolean(in_sats, "get_balances", "in_sats")
        return await self._client.call(WalletMethod.GET_BALANCES, in_sats)

    async def get_transaction(self, txid: str) -> Response:
        """Wallet transaction by id."""
        validate_string(txid, "get_transaction", "txid")
        return await self._client.call(WalletMethod.GET_TRANSACTION, txid)

    async def lock_unspent(self, unlock: bool, outpoints: list[dict[str, Any]]) -> Response:  # noqa: FBT001
        """Lock or unlock outpoints for spending."""
        validate_boolean(unlock, "lock_unspent", "unlock")
        return await self._client.call(WalletMethod.LOCK_UNSPENT, unlock, outpoints)

    async def send_to_address(
        self, address: str, bitcoins: float, sats_per_vbyte: float, no_broadcast: bool  # noqa: FBT001
    ) -> Response:
        """Pay ``bitcoins`` to ``address``. The server answers with the txid."""
        validate_string(address, "send_to_address", "address")
        validate_number(bitcoins, "send_to_address", "bitcoins")
        validate_number(sats_per_vbyte, "send_to_address", "sats_per_vbyte")
        validate_boolean(no_broadcast, "send_to_address", "no_broadcast")
        return await self._client.call(WalletMethod.SEND_TO_ADDRESS, address, bitcoins, sats_per_vbyte, no_broadcast)

    async def send_from_outpoints(self, outpoints: list[dict[str, Any]], bitcoins: float, sats_per_vbyte: float) -> Response:
        """Pay from specific outpoints."""
        validate_number(bitcoins, "send_from_outpoints", "bitcoins")
        validate_number(sats_per_vbyte, "send_from_outpoints", "sats_per_vbyte")
        return await self._client.call(WalletMethod.SEND_FROM_OUTPOINTS, outpoints, bitcoins, sats_per_vbyte)

    async def sweep_wallet(self, address: str, sats_per_vbyte: float) -> Response:
        """Send the whole balance to ``address``. The server answers with the txid."""
        validate_string(address, "sweep_wallet", "address")
        validate_number(sats_per_vbyte, "sweep_wallet", "sats_per_vbyte")
        return await self._client.call(WalletMethod.SWEEP_WALLET, address, sats_per_vbyte)

    async def send_with_algo(self, address: str, bitcoins: float, sats_per_vbyte: float, algo: str) -> Response:
        """Pay using a named coin selection algorithm."""
        validate_string(address, "send_with_algo", "address")
        validate_number(bitcoins, "send_with_algo", "bitcoins")
        validate_number(sats_per_vbyte, "send_with_algo", "sats_per_vbyte")
        validate_string(algo, "send_with_algo", "algo")
        return await self._client.call(WalletMethod.SEND_WITH_ALGO, address, bitcoins, sats_per_vbyte, algo)

    async def sign_psbt(self, hex_or_base64: str) -> Response:
        """Sign a PSBT with wallet keys."""
        validate_string(hex_or_base64, "sign_psbt", "hex_or_base64")
        return await self._client.call(WalletMethod.SIGN_PSBT, hex_or_base64)

    async def op_return_commit(self, message: str, hash_message: bool, sats_per_vbyte: float) -> Response:  # noqa: FBT001
        """Commit ``message`` (or its hash) in an OP_RETURN output."""
        validate_string(message, "op_return_commit", "message")
        validate_boolean(hash_message, "op_return_commit", "hash_message")
        validate_number(sats_per_vbyte, "op_return_commit", "sats_per_vbyte")
        return await self._client.call(WalletMethod.OP_RETURN_COMMIT, message, hash_message, sats_per_vbyte)

    async def bump_fee_rbf(self, txid: str, sats_per_vbyte: float) -> Response:
        """Replace a transaction with a higher fee version."""
        validate_string(txid, "bump_fee_rbf", "txid")
        validate_number(sats_per_vbyte, "bump_fee_rbf", "sats_per_vbyte")
        return await self._client.call(WalletMethod.BUMP_FEE_RBF, txid, sats_per_vbyte)

    async def bump_fee_cpfp(self, txid: str, sats_per_vbyte: float) -> Response:
        """Speed a transaction up with a child paying for its parent."""
        validate_string(txid, "bump_fee_cpfp", "txid")
        validate_number(sats_per_vbyte, "bump_fee_cpfp", "sats_per_vbyte")
        return await self._client.call(WalletMethod.BUMP_FEE_CPFP, txid, sats_per_vbyte)

    async def rescan(
        self, batch_size: int | None, start: int | None, end: int | None, *, force: bool, ignore_creation_time: bool
    ) -> Response:
        """Rescan the chain for wallet transactions. None leaves a bound to the server."""
        for name, value in (("batch_size", batch_size), ("start", start), ("end", end)):
            if value is not None:
                validate_number(value, "rescan", name)
        validate_boolean(force, "rescan", "force")
        validate_boolean(ignore_creation_time, "rescan", "ignore_creation_time")
        return await self._client.call(WalletMethod.RESCAN, batch_size, start, end, force, ignore_creation_time)

    async def get_utxos(self) -> Response:
        """Wallet UTXOs."""
        return await self._client.call(WalletMethod.GET_UTXOS)

    async def list_reserved_utxos(self) -> Response:
        """UTXOs reserved by pending DLCs or locks."""
        return await self._client.call(WalletMethod.LIST_RESERVED_UTXOS)

    async def get_accounts(self) -> Response:
        """Extended public keys of the wallet accounts."""
        return await self._client.call(WalletMethod.GET_ACCOUNTS)

    async def get_address_info(self, address: str) -> Response:
        """Key path and pubkey behind an address."""
        validate_string(address, "get_address_info", "address")
        return await self._client.call(WalletMethod.GET_ADDRESS_INFO, address)

    async def create_new_account(self) -> Response:
        """Create a new HD account."""
        return await self._client.call(WalletMethod.CREATE_NEW_ACCOUNT)

    async def import_seed(self, wallet_name: str, mnemonic: str, passphrase: str | None = None) -> Response:
        """Create a wallet from a mnemonic."""
        validate_string(wallet_name, "import_seed", "wallet_name")
        validate_string(mnemonic, "import_seed", "mnemonic")
        if passphrase is not None:
            validate_string(passphrase, "import_seed", "passphrase")
        logger.debug("importseed %s", wallet_name)
        return await self._client.call(WalletMethod.IMPORT_SEED, wallet_name, mnemonic, passphrase)

    async def import_xprv(self, wallet_name: str, xprv: str, passphrase: str | None = None) -> Response:
        """Create a wallet from an extended private key."""
        validate_string(wallet_name, "import_xprv", "wallet_name")
        validate_string(xprv, "import_xprv", "xprv")
        if passphrase is not None:
            validate_string(passphrase, "import_xprv", "passphrase")
        logger.debug("importxprv %s", wallet_name)
        return await self._client.call(WalletMethod.IMPORT_XPRV, wallet_name, xprv, passphrase)

    async def load_wallet(self, wallet_name: str | None = None, passphrase: str | None = None) -> Response:
        """Switch to another wallet; None selects the default wallet."""
        if wallet_name is not None:
            validate_string(wallet_name, "load_wallet", "wallet_name")
        if passphrase is not None:
            validate_string(passphrase, "load_wallet", "passphrase")
        logger.debug("loadwallet %s", wallet_name)
        return await self._client.call(WalletMethod.LOAD_WALLET, wallet_name, passphrase)

    async def export_seed(self, wallet_name: str | None = None, passphrase: str | None = None) -> Response:
        """Mnemonic words of a wallet; None selects the default wallet."""
        if wallet_name is not None:
            validate_string(wallet_name, "export_seed", "wallet_name")
        if passphrase is not None:
            validate_string(passphrase, "export_seed", "passphrase")
        return await self._client.call(WalletMethod.EXPORT_SEED, wallet_name, passphrase)

    async def get_seed_backup_time(self, wallet_name: str | None = None, passphrase: str | None = None) -> Response:
        """When the seed was last marked as backed up."""
        if wallet_name is not None:
            validate_string(wallet_name, "get_seed_backup_time", "wallet_name")
        if passphrase is not None:
            validate_string(passphrase, "get_seed_backup_time", "passphrase")
        return await self._client.call(WalletMethod.GET_SEED_BACKUP_TIME, wallet_name, passphrase)

    async def send_raw_transaction(self, tx_hex: str) -> Response:
        """Broadcast a raw transaction. The server answers with the txid."""
        validate_string(tx_hex, "send_raw_transaction", "tx_hex")
        return await self._client.call(WalletMethod.SEND_RAW_TRANSACTION, tx_hex)

    async def estimate_fee(self) -> Response:
        """Fee estimate in sats/vbyte; -1 when the server has none."""
        return await self._client.call(WalletMethod.ESTIMATE_FEE)

    async def get_dlc_wallet_accounting(self) -> Response:
        """Aggregate PnL over all DLCs."""
        return await self._client.call(WalletMethod.GET_DLC_WALLET_ACCOUNTING)

    async def backup_wallet(self, path: str) -> Response:
        """Back the wallet database up to ``path`` on the server host."""
        validate_string(path, "backup_wallet", "path")
        return await self._client.call(WalletMethod.BACKUP_WALLET, path)

    # --- DLC ---

    async def get_dlc_host_address(self) -> Response:
        """Address peers use to reach this node's DLC server."""
        return await self._client.call(DLCMethod.GET_DLC_HOST_ADDRESS)

    async def create_contract_info(self, announcement_tlv: str, total_collateral: int, payouts: Any) -> Response:  # noqa: ANN401
        """Build a contract info TLV from an announcement and payout curve."""
        validate_string(announcement_tlv, "create_contract_info", "announcement_tlv")
        validate_number(total_collateral, "create_contract_info", "total_collateral")
        return await self._client.call(DLCMethod.CREATE_CONTRACT_INFO, announcement_tlv, total_collateral, payouts)

    async def create_dlc_offer(self, contract_info_tlv: str, collateral: int, fee_rate: float, refund_locktime: int) -> Response:
        """Create an offer; collateral in sats, fee rate in sats/vbyte."""
        validate_string(contract_info_tlv, "create_dlc_offer", "contract_info_tlv")
        validate_number(collateral, "create_dlc_offer", "collateral")
        validate_number(fee_rate, "create_dlc_offer", "fee_rate")
        validate_number(refund_locktime, "create_dlc_offer", "refund_locktime")
        # Contract locktime is left to the server
        locktime = None
        return await self._client.call(
            WalletMethod.CREATE_DLC_OFFER, contract_info_tlv, collateral, fee_rate, locktime, refund_locktime
        )

    async def get_dlc_offer(self, temporary_contract_id: str) -> Response:
        """Offer message hex of a DLC we offered."""
        validate_string(temporary_contract_id, "get_dlc_offer", "temporary_contract_id")
        return await self._client.call(WalletMethod.GET_DLC_OFFER, temporary_contract_id)

    async def accept_dlc_offer(self, offer_hex: str) -> Response:
        """Accept an offer. The server answers with the accept message hex."""
        validate_string(offer_hex, "accept_dlc_offer", "offer_hex")
        return await self._client.call(WalletMethod.ACCEPT_DLC_OFFER, offer_hex)

    async def accept_dlc_offer_from_file(self, path: str, destination: str | None = None) -> Response:
        """Accept an offer stored in a file on the server host."""
        args = _file_args("accept_dlc_offer_from_file", path, destination)
        return await self._client.call(WalletMethod.ACCEPT_DLC_OFFER_FROM_FILE, *args)

    async def sign_dlc(self, accept_hex: str) -> Response:
        """Sign an accepted DLC."""
        validate_string(accept_hex, "sign_dlc", "accept_hex")
        return await self._client.call(WalletMethod.SIGN_DLC, accept_hex)

    async def sign_dlc_from_file(self, path: str, destination: str | None = None) -> Response:
        """Sign an accept message stored in a file on the server host."""
        return await self._client.call(WalletMethod.SIGN_DLC_FROM_FILE, *_file_args("sign_dlc_from_file", path, destination))

    async def add_dlc_sigs(self, sigs_hex: str) -> Response:
        """Add the counterparty's signatures."""
        validate_string(sigs_hex, "add_dlc_sigs", "sigs_hex")
        return await self._client.call(WalletMethod.ADD_DLC_SIGS, sigs_hex)

    async def add_dlc_sigs_from_file(self, path: str, destination: str | None = None) -> Response:
        """Add signatures stored in a file on the server host."""
        args = _file_args("add_dlc_sigs_from_file", path, destination)
        return await self._client.call(WalletMethod.ADD_DLC_SIGS_FROM_FILE, *args)

    async def add_dlc_sigs_and_broadcast(self, sigs_hex: str) -> Response:
        """Add signatures and broadcast the funding transaction. The server answers with the txid."""
        validate_string(sigs_hex, "add_dlc_sigs_and_broadcast", "sigs_hex")
        return await self._client.call(WalletMethod.ADD_DLC_SIGS_AND_BROADCAST, sigs_hex)

    async def add_dlc_sigs_and_broadcast_from_file(self, path: str, destination: str | None = None) -> Response:
        """Add signatures from a file on the server host and broadcast."""
        args = _file_args("add_dlc_sigs_and_broadcast_from_file", path, destination)
        return await self._client.call(WalletMethod.ADD_DLC_SIGS_AND_BROADCAST_FROM_FILE, *args)

    async def get_dlc_funding_tx(self, contract_id: str) -> Response:
        """Funding transaction of a DLC."""
        validate_string(contract_id, "get_dlc_funding_tx", "contract_id")
        return await self._client.call(WalletMethod.GET_DLC_FUNDING_TX, contract_id)

    async def broadcast_dlc_funding_tx(self, contract_id: str) -> Response:
        """Broadcast the funding transaction of a DLC."""
        validate_string(contract_id, "broadcast_dlc_funding_tx", "contract_id")
        return await self._client.call(WalletMethod.BROADCAST_DLC_FUNDING_TX, contract_id)

    async def execute_dlc(self, contract_id: str, oracle_sigs: list[str], no_broadcast: bool) -> Response:  # noqa: FBT001
        """Close a DLC with oracle attestations. The server answers with the closing txid."""
        validate_string(contract_id, "execute_dlc", "contract_id")
        for sig in oracle_sigs:
            validate_string(sig, "execute_dlc", "oracle_sigs")
        validate_boolean(no_broadcast, "execute_dlc", "no_broadcast")
        return await self._client.call(WalletMethod.EXECUTE_DLC, contract_id, oracle_sigs, no_broadcast)

    async def execute_dlc_refund(self, contract_id: str, no_broadcast: bool) -> Response:  # noqa: FBT001
        """Close a DLC through its refund path. The server answers with the txid."""
        validate_string(contract_id, "execute_dlc_refund", "contract_id")
        validate_boolean(no_broadcast, "execute_dlc_refund", "no_broadcast")
        return await self._client.call(WalletMethod.EXECUTE_DLC_REFUND, contract_id, no_broadcast)

    # --- Core (stateless decoding) ---

    async def decode_sign(self, sign_hex: str) -> Response:
        """Decode a DLC sign message."""
        validate_string(sign_hex, "decode_sign", "sign_hex")
        return await self._client.call(CoreMethod.DECODE_SIGN, sign_hex)

    async def decode_accept(self, accept_hex: str) -> Response:
        """Decode a DLC accept message."""
        validate_string(accept_hex, "decode_accept", "accept_hex")
        return await self._client.call(CoreMethod.DECODE_ACCEPT, accept_hex)

    async def decode_offer(self, offer_hex: str) -> Response:
        """Decode a DLC offer message."""
        validate_string(offer_hex, "decode_offer", "offer_hex")
        return await self._client.call(CoreMethod.DECODE_OFFER, offer_hex)

    async def decode_contract_info(self, contract_info_hex: str) -> Response:
        """Decode a contract info TLV."""
        validate_string(contract_info_hex, "decode_contract_info", "contract_info_hex")
        return await self._client.call(CoreMethod.DECODE_CONTRACT_INFO, contract_info_hex)

    async def decode_announcement(self, announcement_hex: str) -> Response:
        """Decode an oracle announcement TLV."""
        validate_string(announcement_hex, "decode_announcement", "announcement_hex")
        return await self._client.call(CoreMethod.DECODE_ANNOUNCEMENT, announcement_hex)

    async def decode_attestments(self, attestment_hex: str) -> Response:
        """Decode an oracle attestation TLV. The server answers "failure" on bad input."""
        validate_string(attestment_hex, "decode_attestments", "attestment_hex")
        return await self._client.call(CoreMethod.DECODE_ATTESTMENTS, attestment_hex)

    async def decode_raw_transaction(self, tx_hex: str) -> Response:
        """Decode a raw transaction."""
        validate_string(tx_hex, "decode_raw_transaction", "tx_hex")
        return await self._client.call(CoreMethod.DECODE_RAW_TRANSACTION, tx_hex)

    async def decode_psbt(self, psbt: str) -> Response:
        """Decode a PSBT."""
        validate_string(psbt, "decode_psbt", "psbt")
        return await self._client.call(CoreMethod.DECODE_PSBT, psbt)

    async def analyze_psbt(self, psbt: str) -> Response:
        """Report what a PSBT still needs to be finalized."""
        validate_string(psbt, "analyze_psbt", "psbt")
        return await self._client.call(CoreMethod.ANALYZE_PSBT, psbt)

    async def finalize_psbt(self, psbt: str) -> Response:
        """Finalize a fully signed PSBT."""
        validate_string(psbt, "finalize_psbt", "psbt")
        return await self._client.call(CoreMethod.FINALIZE_PSBT, psbt)

    async def extract_from_psbt(self, psbt: str) -> Response:
        """Extract the network transaction from a finalized PSBT."""
        validate_string(psbt, "extract_from_psbt", "psbt")
        return await self._client.call(CoreMethod.EXTRACT_FROM_PSBT, psbt)

    async def convert_to_psbt(self, tx_hex: str) -> Response:
        """Wrap an unsigned transaction in a PSBT."""
        validate_string(tx_hex, "convert_to_psbt", "tx_hex")
        return await self._client.call(CoreMethod.CONVERT_TO_PSBT, tx_hex)

    async def combine_psbts(self, psbts: list[str]) -> Response:
        """Merge signatures from several copies of one PSBT."""
        for psbt in psbts:
            validate_string(psbt, "combine_psbts", "psbts")
        return await self._client.call(CoreMethod.COMBINE_PSBTS, psbts)

    async def join_psbts(self, psbts: list[str]) -> Response:
        """Join the inputs and outputs of several PSBTs."""
        for psbt in psbts:
            validate_string(psbt, "join_psbts", "psbts")
        return await self._client.call(CoreMethod.JOIN_PSBTS, psbts)
