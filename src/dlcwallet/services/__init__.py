"""Per-domain caches fed from the wallet server."""

from dlcwallet.services.addresses import AddressService as AddressService
from dlcwallet.services.contacts import ContactService as ContactService
from dlcwallet.services.dlcs import DLCService as DLCService
from dlcwallet.services.offers import OfferService as OfferService
