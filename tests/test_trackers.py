from bs4 import BeautifulSoup

from src.config import Settings
from src.models.watchlist import MonitoredProduct, WatchlistEntry
from src.trackers.strategies import (
    FixedListTracker,
    ListingPageTracker,
    SearchTracker,
    get_tracker,
)

BASE = "https://shop.test"

BIKE_PAGE = """
<html><head><title>Fat Ride Bike | Shop</title></head>
<body>
  <h1>Hot Wheels Fat Ride Bike</h1>
  <div class="prod-price">₹ 1,249.00</div>
  <div class="price-old">₹ 1,499.00</div>
  <button>Add to Cart</button>
</body></html>
"""

SOLD_OUT_PAGE = """
<html><body>
  <h1>Hot Wheels Sold Out Van</h1>
  <span class="our_price">₹ 599</span>
  <p>Sorry, this item is Out of Stock</p>
</body></html>
"""

NO_PRICE_PAGE = "<html><body><h1>Hot Wheels Mystery</h1></body></html>"

SEARCH_PAGE = """
<html><body>
  <div class="product-card">
    <a href="/hot-wheels/bone-shaker/123/product-detail"><img src="a.jpg"></a>
    <div class="product-title">Hot Wheels Bone Shaker</div>
    <span class="price">₹ 299.00</span>
  </div>
  <div class="product-card">
    <a href="https://other.test/p/9" title="Hot Wheels Track Builder Set"></a>
    <span class="price">₹1,499</span>
  </div>
  <div class="product-card">
    <div class="product-title">Hot Wheels Monster Truck</div>
    <span class="price">Sold out</span>
  </div>
  <div class="product-card">
    <div class="product-title">Hot Wheels Bone Shaker</div>
    <span class="price">₹ 199.00</span>
  </div>
  <div class="product-card">
    <div class="product-title">Car</div>
    <span class="price">₹ 50</span>
  </div>
</body></html>
"""

LISTING_PAGE = """
<html><body><ul>
  <li class="nav-link"><a href="/home">Home</a><span class="price">1</span></li>
  <li class="list_box">
    <a href="toy/1" title="Hot Wheels 5 Car Pack"></a>
    <div class="rupee-price">₹ 649</div>
  </li>
  <li class="prod-item">
    <h3>Hot Wheels City Garage</h3>
    <span class="price">1,999.50</span>
    <p>Out of Stock</p>
    <a href="https://shop.test/garage/product-detail">view</a>
  </li>
  <li class="item"><h3>Hot Wheels Loop</h3></li>
</ul></body></html>
"""


class FakeFetcher:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        html = self.pages.get(url)
        if html is None:
            return None
        return BeautifulSoup(html, "lxml")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _settings(**overrides):
    values = dict(
        base_url=BASE,
        search_url=BASE + "/search?q={query}",
        listing_url=BASE + "/hot-wheels",
        default_category="Hot Wheels",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestFixedListTracker:
    def test_collects_price_and_stock(self):
        settings = _settings(
            monitored_products=[
                MonitoredProduct(name="Hot Wheels Fat Ride Bike", url=BASE + "/bike"),
                MonitoredProduct(url=BASE + "/van", category="Vans"),
            ]
        )
        fetcher = FakeFetcher({BASE + "/bike": BIKE_PAGE, BASE + "/van": SOLD_OUT_PAGE})

        products = FixedListTracker(fetcher, settings).collect()

        assert len(products) == 2
        bike, van = products
        assert bike.name == "Hot Wheels Fat Ride Bike"
        assert bike.price == 1249.0
        assert bike.in_stock is True
        assert bike.category == "Hot Wheels"
        assert bike.url == BASE + "/bike"
        assert van.name == "Hot Wheels Sold Out Van"
        assert van.in_stock is False
        assert van.category == "Vans"

    def test_failed_sources_do_not_abort_the_rest(self):
        settings = _settings(
            monitored_products=[
                MonitoredProduct(name="Hot Wheels Down", url=BASE + "/down"),
                MonitoredProduct(name="Hot Wheels Mystery", url=BASE + "/mystery"),
                MonitoredProduct(name="Hot Wheels Fat Ride Bike", url=BASE + "/bike"),
            ]
        )
        fetcher = FakeFetcher({BASE + "/mystery": NO_PRICE_PAGE, BASE + "/bike": BIKE_PAGE})

        products = FixedListTracker(fetcher, settings).collect()

        assert [p.name for p in products] == ["Hot Wheels Fat Ride Bike"]
        assert len(fetcher.requested) == 3


class TestSearchTracker:
    def test_parses_tiles(self):
        settings = _settings(
            watchlist=[WatchlistEntry(name="Hot Wheels", keywords=["bone shaker"])]
        )
        fetcher = FakeFetcher({BASE + "/search?q=Hot+Wheels": SEARCH_PAGE})

        products = SearchTracker(fetcher, settings).collect()

        assert [p.name for p in products] == [
            "Hot Wheels Bone Shaker",
            "Hot Wheels Track Builder Set",
        ]
        shaker, track = products
        assert shaker.price == 299.0
        assert shaker.url == BASE + "/hot-wheels/bone-shaker/123/product-detail"
        assert shaker.category == "Hot Wheels"
        assert track.price == 1499.0
        assert track.url == "https://other.test/p/9"

    def test_keyword_filter_when_enforced(self):
        settings = _settings(
            enforce_keyword_filter=True,
            watchlist=[WatchlistEntry(name="Hot Wheels", keywords=["Bone Shaker"])],
        )
        fetcher = FakeFetcher({BASE + "/search?q=Hot+Wheels": SEARCH_PAGE})

        products = SearchTracker(fetcher, settings).collect()

        assert [p.name for p in products] == ["Hot Wheels Bone Shaker"]

    def test_query_override_and_failed_category(self):
        settings = _settings(
            watchlist=[
                WatchlistEntry(name="Broken", query="nothing here"),
                WatchlistEntry(name="Sets", query="hot wheels"),
            ]
        )
        fetcher = FakeFetcher({BASE + "/search?q=hot+wheels": SEARCH_PAGE})

        products = SearchTracker(fetcher, settings).collect()

        assert fetcher.requested == [
            BASE + "/search?q=nothing+here",
            BASE + "/search?q=hot+wheels",
        ]
        assert len(products) == 2
        assert all(p.category == "Sets" for p in products)


class TestListingPageTracker:
    def test_scans_list_items(self):
        fetcher = FakeFetcher({BASE + "/hot-wheels": LISTING_PAGE})

        products = ListingPageTracker(fetcher, _settings()).collect()

        assert [p.name for p in products] == [
            "Hot Wheels 5 Car Pack",
            "Hot Wheels City Garage",
        ]
        pack, garage = products
        assert pack.url == BASE + "/toy/1"
        assert pack.price == 649.0
        assert garage.price == 1999.5
        assert garage.in_stock is False
        assert garage.url == "https://shop.test/garage/product-detail"

    def test_fetch_failure_yields_nothing(self):
        fetcher = FakeFetcher({})
        assert ListingPageTracker(fetcher, _settings()).collect() == []


def test_get_tracker():
    fetcher = FakeFetcher({})
    settings = _settings()

    assert isinstance(get_tracker("fixed_list", fetcher, settings), FixedListTracker)
    assert isinstance(get_tracker("search", fetcher, settings), SearchTracker)
    assert isinstance(get_tracker("listing_page", fetcher, settings), ListingPageTracker)
    assert get_tracker("rss", fetcher, settings) is None
