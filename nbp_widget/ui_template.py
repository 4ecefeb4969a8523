"""
HTML Template for the NBP exchange rate widget
"""

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="pl">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>NBP sprawdź kursy walut</title>
    <style>
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            background: linear-gradient(135deg, #eff6ff 0%, #f9fafb 100%);
            min-height: 100vh;
            padding: 4px 24px;
        }

        .container {
            width: 600px;
            min-height: 400px;
        }

        .header {
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin: 8px 0;
        }

        .header h1 {
            color: #111827;
            font-size: 24px;
            font-weight: 700;
        }

        .date-picker {
            position: relative;
        }

        .date-picker input {
            padding: 8px 40px 8px 12px;
            border: 1px solid #d1d5db;
            border-radius: 6px;
            background: white;
            transition: border-color 0.2s;
        }

        .date-picker input:hover {
            border-color: #60a5fa;
        }

        .loading-spinner {
            display: none;
            position: absolute;
            right: 12px;
            top: 50%;
            width: 16px;
            height: 16px;
            margin-top: -8px;
            border: 3px solid rgba(37, 99, 235, 0.3);
            border-radius: 50%;
            border-top-color: #2563eb;
            animation: spin 0.8s linear infinite;
        }

        .loading-spinner.active {
            display: inline-block;
        }

        @keyframes spin {
            to { transform: rotate(360deg); }
        }

        @keyframes fadeIn {
            from { opacity: 0; }
            to { opacity: 1; }
        }

        .error-banner {
            display: none;
            background: #fef2f2;
            border-left: 4px solid #ef4444;
            padding: 16px;
            color: #b91c1c;
            border-radius: 0 6px 6px 0;
            margin-bottom: 8px;
            animation: fadeIn 0.3s ease-out;
        }

        .rates-card {
            display: none;
            background: white;
            border-radius: 8px;
            box-shadow: 0 10px 15px rgba(0, 0, 0, 0.1);
            overflow: hidden;
        }

        .rates-header {
            padding: 8px 24px;
            border-bottom: 1px solid #e5e7eb;
            background: linear-gradient(90deg, #eff6ff, white);
        }

        .rates-header h2 {
            font-size: 18px;
            font-weight: 600;
            color: #111827;
        }

        .rates-header p {
            font-size: 14px;
            color: #6b7280;
        }

        table {
            width: 100%;
            border-collapse: collapse;
        }

        th {
            padding: 8px 24px;
            text-align: left;
            font-size: 12px;
            font-weight: 500;
            color: #6b7280;
            text-transform: uppercase;
            background: #f9fafb;
        }

        th.numeric, td.numeric {
            text-align: right;
        }

        td {
            padding: 4px 24px;
            font-size: 14px;
            color: #111827;
            border-top: 1px solid #e5e7eb;
            white-space: nowrap;
        }

        tr:hover td {
            background: #eff6ff;
        }

        tr.priority td {
            background: rgba(239, 246, 255, 0.3);
        }

        td.code {
            color: #2563eb;
            font-weight: 500;
        }

        td.rate {
            font-family: 'Monaco', 'Menlo', monospace;
            cursor: pointer;
            position: relative;
        }

        td.rate:hover .value {
            color: #2563eb;
        }

        .copied-badge {
            position: absolute;
            right: 64px;
            top: 50%;
            transform: translateY(-50%);
            color: #16a34a;
            font-size: 12px;
            background: white;
            padding: 4px 8px;
            border-radius: 6px;
            border: 1px solid #dcfce7;
            animation: fadeIn 0.3s ease-out;
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>📅 NBP sprawdź kursy walut</h1>
            <div class="date-picker">
                <input type="date" id="date-input" value="{{ default_date }}">
                <span class="loading-spinner" id="spinner"></span>
            </div>
        </div>

        <div class="error-banner" id="error-banner"></div>

        <div class="rates-card" id="rates-card">
            <div class="rates-header">
                <h2 id="rates-title"></h2>
                <p id="rates-subtitle"></p>
            </div>
            <table>
                <thead>
                    <tr>
                        <th>Waluta</th>
                        <th>kod waluty</th>
                        <th class="numeric">Kurs (PLN)</th>
                    </tr>
                </thead>
                <tbody id="rates-body"></tbody>
            </table>
        </div>
    </div>

    <script>
        const COPY_BADGE_MS = {{ copy_badge_ms }};
        let currentState = null;
        let copiedRate = null;
        let copyTimer = null;

        function setLoading(isLoading) {
            document.getElementById('spinner').classList.toggle('active', isLoading);
        }

        function renderError(message) {
            const banner = document.getElementById('error-banner');
            banner.textContent = message || '';
            banner.style.display = message ? 'block' : 'none';
        }

        function renderTable(table) {
            const card = document.getElementById('rates-card');
            const body = document.getElementById('rates-body');
            if (!table) {
                card.style.display = 'none';
                return;
            }

            card.style.display = 'block';
            document.getElementById('rates-title').textContent = `Exchange Rates for ${table.effectiveDate}`;
            document.getElementById('rates-subtitle').textContent = `Table ${table.no}`;
            body.innerHTML = '';

            table.rates.forEach((rate, index) => {
                const row = document.createElement('tr');
                if (rate.priority) {
                    row.className = 'priority';
                }
                row.style.animation = `fadeIn 0.5s ease-out ${index * 50}ms both`;

                const name = document.createElement('td');
                name.textContent = rate.currency;
                const code = document.createElement('td');
                code.className = 'code';
                code.textContent = rate.code;

                const value = document.createElement('td');
                value.className = 'rate numeric';
                const text = document.createElement('span');
                text.className = 'value';
                text.textContent = rate.formatted;
                value.appendChild(text);
                if (copiedRate === rate.formatted) {
                    const badge = document.createElement('span');
                    badge.className = 'copied-badge';
                    badge.textContent = '✓ Copied';
                    value.appendChild(badge);
                }
                value.addEventListener('click', () => copyRate(rate));

                row.append(name, code, value);
                body.appendChild(row);
            });
        }

        function render() {
            if (!currentState) {
                return;
            }
            renderError(currentState.error);
            renderTable(currentState.table);
        }

        async function fetchRates(selectedDate) {
            setLoading(true);
            try {
                const response = await fetch(`/api/rates?date=${encodeURIComponent(selectedDate)}`);
                currentState = await response.json();
                render();
            } catch (error) {
                renderError(error.message || 'Failed to fetch rates');
            } finally {
                setLoading(false);
            }
        }

        function showCopied(text) {
            copiedRate = text;
            render();

            clearTimeout(copyTimer);
            copyTimer = setTimeout(() => {
                copiedRate = null;
                render();
            }, COPY_BADGE_MS);
        }

        function copyRate(rate) {
            // Write inside the click handler so the user gesture is still valid.
            navigator.clipboard.writeText(rate.formatted)
                .catch((error) => console.error('Clipboard write failed', error));
            showCopied(rate.formatted);

            fetch('/api/copy', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ mid: rate.mid }),
            }).catch((error) => console.error('Copy notification failed', error));
        }

        const dateInput = document.getElementById('date-input');
        dateInput.addEventListener('change', (event) => {
            if (event.target.value) {
                fetchRates(event.target.value);
            }
        });
        fetchRates(dateInput.value);
    </script>
</body>
</html>
"""
