#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Check the customer tracking sheet structure and print the tracker for a DNI

Usage:
    python check_customer_sheet.py [DNI]
"""
import sys
sys.path.insert(0, 'src')

from sheets.customer_sheet import CustomerSheet
from tracker.progress import build_tracker, overall_status
import config


def main():
    print("\n" + "="*80)
    print("Checking Customer Tracking Sheet")
    print("="*80 + "\n")

    try:
        sheets = CustomerSheet()

        headers = sheets.get_headers()
        print(f"[INFO] Headers: {headers}")

        missing = sheets.validate_sheet_structure()
        if missing:
            print(f"[WARN] Missing mapped columns: {missing}")
            print("       Adjust CUSTOMER_COLUMNS_JSON if the sheet uses other headers")
        else:
            print("[OK] All mapped columns present")

        if len(sys.argv) < 2:
            return

        dni = sys.argv[1]
        customer = sheets.find_by_dni(dni)
        if customer is None:
            print(f"\n[INFO] {config.MSG_DNI_NOT_FOUND}")
            return

        print(f"\n{'='*80}")
        print(f"ROW {customer.row_number}: {customer.customer_name} (Asesor: {customer.salesperson})")
        print(f"{'='*80}")

        tracker = build_tracker(customer)
        for step in tracker.steps:
            print(f"  {step.label:<12} {step.status.value:<12} {step.detail}")
        print(f"\nOverall: {overall_status(tracker).value}")

        if customer.extra:
            print(f"\nUnmapped columns: {customer.extra}")

    except Exception as e:
        print(f"[ERROR] {str(e)}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
