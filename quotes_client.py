from urllib.parse import quote

import requests

from errors import FetchFailure, PartialFetchFailure
from layout import UNKNOWN_QUOTE, is_known_quote

CHART_API_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
CHART_PAGE_URL = "https://finance.yahoo.com/quote/{symbol}/chart"
REQUEST_TIMEOUT = 10

# Use a standard browser user-agent to avoid being blocked
HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
}

def chart_url(symbol):
    """Returns the web page showing the chart for a symbol."""
    return CHART_PAGE_URL.format(symbol=quote(symbol, safe=''))

def parse_price(symbol, data):
    """
    Extracts the current market price from a chart API response.

    Raises:
        PartialFetchFailure: If the response carries no usable price.
    """
    try:
        price = data['chart']['result'][0]['meta']['regularMarketPrice']
    except (KeyError, IndexError, TypeError) as e:
        raise PartialFetchFailure(symbol, f"invalid ticker or API change? {e!r}") from e
    if not is_known_quote(price):
        raise PartialFetchFailure(symbol, f"no price in API response ({price!r})")
    return float(price)

def fetch_quote(session, symbol):
    url = CHART_API_URL.format(symbol=quote(symbol, safe=''))
    try:
        response = session.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout):
        raise
    except requests.exceptions.RequestException as e:
        raise PartialFetchFailure(symbol, str(e)) from e
    except ValueError as e:
        raise PartialFetchFailure(symbol, f"response is not JSON: {e}") from e
    return parse_price(symbol, data)

def fetch_quotes(symbols, session=None):
    """
    Fetches the current market price for a list of symbols from Yahoo Finance.

    Args:
        symbols (sequence): Ticker symbols (e.g., ['AAPL', 'GOOG']).
        session (requests.Session): Optional session to reuse.

    Returns:
        list: One entry per symbol, in order; the price or UNKNOWN_QUOTE.

    Raises:
        FetchFailure: If the network is unreachable or times out.
    """
    if not symbols:
        return []

    own_session = session is None
    if own_session:
        session = requests.Session()

    quotes = []
    try:
        for symbol in symbols:
            try:
                quotes.append(fetch_quote(session, symbol))
            except PartialFetchFailure as e:
                print(f"[QUOTES] Error fetching {e}")
                quotes.append(UNKNOWN_QUOTE)
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        raise FetchFailure(f"Quote request failed: {e}") from e
    finally:
        if own_session:
            session.close()

    return quotes

if __name__ == '__main__':
    # Example usage:
    test_symbols = ['AAPL', 'MSFT', 'GOOG']
    for symbol, price in zip(test_symbols, fetch_quotes(test_symbols)):
        print(f"{symbol}: {price if price is not None else '???'}")
