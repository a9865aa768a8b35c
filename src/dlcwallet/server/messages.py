"""Wallet server method names, grouped the way the server routes them."""

from enum import StrEnum


class CommonMethod(StrEnum):
    """Methods shared by the wallet and oracle servers."""

    GET_VERSION = "getversion"
    ZIP_DATA_DIR = "zipdatadir"


class BlockchainMethod(StrEnum):
    """Chain and node queries."""

    GET_BLOCK_COUNT = "getblockcount"
    GET_FILTER_COUNT = "getfiltercount"
    GET_FILTER_HEADER_COUNT = "getfilterheadercount"
    GET_BLOCK_HEADER = "getblockheader"
    GET_INFO = "getinfo"


class NetworkMethod(StrEnum):
    """Peer and node lifecycle."""

    GET_PEERS = "getpeers"
    STOP = "stop"


class DLCMethod(StrEnum):
    """DLC node methods."""

    GET_DLC_HOST_ADDRESS = "getdlchostaddress"
    CREATE_CONTRACT_INFO = "createcontractinfo"


class WalletMethod(StrEnum):
    """Wallet methods."""

    IS_EMPTY = "isempty"
    WALLET_INFO = "walletinfo"
    GET_BALANCE = "getbalance"
    GET_CONFIRMED_BALANCE = "getconfirmedbalance"
    GET_UNCONFIRMED_BALANCE = "getunconfirmedbalance"
    GET_BALANCES = "getbalances"
    GET_NEW_ADDRESS = "getnewaddress"
    GET_TRANSACTION = "gettransaction"
    LOCK_UNSPENT = "lockunspent"
    LABEL_ADDRESS = "labeladdress"
    DROP_ADDRESS_LABEL = "dropaddresslabel"
    GET_ADDRESS_LABELS = "getaddresslabels"
    DROP_ADDRESS_LABELS = "dropaddresslabels"
    GET_DLCS = "getdlcs"
    GET_DLC = "getdlc"
    CANCEL_DLC = "canceldlc"
    CREATE_DLC_OFFER = "createdlcoffer"
    GET_DLC_OFFER = "getdlcoffer"
    ACCEPT_DLC_OFFER = "acceptdlcoffer"
    ACCEPT_DLC_OFFER_FROM_FILE = "acceptdlcofferfromfile"
    SIGN_DLC = "signdlc"
    SIGN_DLC_FROM_FILE = "signdlcfromfile"
    ADD_DLC_SIGS = "adddlcsigs"
    ADD_DLC_SIGS_FROM_FILE = "adddlcsigsfromfile"
    ADD_DLC_SIGS_AND_BROADCAST = "adddlcsigsandbroadcast"
    ADD_DLC_SIGS_AND_BROADCAST_FROM_FILE = "adddlcsigsandbroadcastfromfile"
    GET_DLC_FUNDING_TX = "getdlcfundingtx"
    BROADCAST_DLC_FUNDING_TX = "broadcastdlcfundingtx"
    EXECUTE_DLC = "executedlc"
    EXECUTE_DLC_REFUND = "executedlcrefund"
    SEND_TO_ADDRESS = "sendtoaddress"
    SEND_FROM_OUTPOINTS = "sendfromoutpoints"
    SWEEP_WALLET = "sweepwallet"
    SEND_WITH_ALGO = "sendwithalgo"
    SIGN_PSBT = "signpsbt"
    OP_RETURN_COMMIT = "opreturncommit"
    BUMP_FEE_RBF = "bumpfeerbf"
    BUMP_FEE_CPFP = "bumpfeecpfp"
    RESCAN = "rescan"
    GET_UTXOS = "getutxos"
    LIST_RESERVED_UTXOS = "listreservedutxos"
    GET_ADDRESSES = "getaddresses"
    GET_SPENT_ADDRESSES = "getspentaddresses"
    GET_FUNDED_ADDRESSES = "getfundedaddresses"
    GET_UNUSED_ADDRESSES = "getunusedaddresses"
    GET_ACCOUNTS = "getaccounts"
    GET_ADDRESS_INFO = "getaddressinfo"
    CREATE_NEW_ACCOUNT = "createnewaccount"
    IMPORT_SEED = "importseed"
    IMPORT_XPRV = "importxprv"
    LOAD_WALLET = "loadwallet"
    EXPORT_SEED = "exportseed"
    GET_SEED_BACKUP_TIME = "getseedbackuptime"
    SEND_RAW_TRANSACTION = "sendrawtransaction"
    ESTIMATE_FEE = "estimatefee"
    GET_DLC_WALLET_ACCOUNTING = "getdlcwalletaccounting"
    BACKUP_WALLET = "backupwallet"
    # Incoming offers
    OFFERS_LIST = "offers-list"
    OFFER_ADD = "offer-add"
    OFFER_REMOVE = "offer-remove"
    OFFER_SEND = "offer-send"
    # Contacts
    CONTACTS_LIST = "contacts-list"
    CONTACT_ADD = "contact-add"
    CONTACT_REMOVE = "contact-remove"
    DLC_CONTACT_ADD = "dlc-contact-add"
    DLC_CONTACT_REMOVE = "dlc-contact-remove"


class CoreMethod(StrEnum):
    """Stateless decode/PSBT helpers."""

    FINALIZE_PSBT = "finalizepsbt"
    EXTRACT_FROM_PSBT = "extractfrompsbt"
    CONVERT_TO_PSBT = "converttopsbt"
    COMBINE_PSBTS = "combinepsbts"
    JOIN_PSBTS = "joinpsbts"
    DECODE_PSBT = "decodepsbt"
    DECODE_RAW_TRANSACTION = "decoderawtransaction"
    ANALYZE_PSBT = "analyzepsbt"
    DECODE_SIGN = "decodesign"
    DECODE_ACCEPT = "decodeaccept"
    DECODE_OFFER = "decodeoffer"
    DECODE_CONTRACT_INFO = "decodecontractinfo"
    DECODE_ANNOUNCEMENT = "decodeannouncement"
    DECODE_ATTESTMENTS = "decodeattestments"
    CREATE_MULTISIG = "createmultisig"
