"""Local development server for the NBP exchange rate widget."""

from nbp_widget.app import main

if __name__ == "__main__":
    main()
