"""Unit tests for the product counter rules."""

import pytest

from careerconnect.core.database.entities import ProdukHewan
from careerconnect.core.models.domain import ProductLogEvent, ProductLogPlace
from careerconnect.server.services.products import PLACE_COUNTERS, apply_event


@pytest.fixture
def produk() -> ProdukHewan:
    return ProdukHewan(nama="Daging Sapi 1kg", di_timbang=10, di_inventori=5, sdh_diserahkan=0)


@pytest.mark.parametrize(
    "place,counter",
    [
        (ProductLogPlace.PENYEMBELIHAN, "di_timbang"),
        (ProductLogPlace.INVENTORY, "di_inventori"),
        (ProductLogPlace.DISTRIBUSI, "sdh_diserahkan"),
    ],
)
def test_each_place_moves_its_own_counter(produk, place, counter):
    assert PLACE_COUNTERS[place] == counter
    before = {name: getattr(produk, name) for name in PLACE_COUNTERS.values()}

    updated = apply_event(produk, ProductLogEvent.menambahkan, place, 3)

    assert updated == before[counter] + 3
    for name, value in before.items():
        if name != counter:
            assert getattr(produk, name) == value


def test_moving_out_decreases(produk):
    assert apply_event(produk, ProductLogEvent.memindahkan, ProductLogPlace.PENYEMBELIHAN, 4) == 6
    assert produk.di_timbang == 6


def test_counter_never_negative(produk):
    assert apply_event(produk, ProductLogEvent.memindahkan, ProductLogPlace.INVENTORY, 50) == 0
    assert produk.di_inventori == 0
