"""Example: using the service layer without Flask.

Lists the stored staff and writes the staff directory PDF to Downloads.
"""

from dotenv import load_dotenv

from config import load_settings

from src.staff_directory.staff_directory.container import build_container_from_settings


def main():
    load_dotenv(override=False)
    container = build_container_from_settings(load_settings())
    for staff in container.staff_service.get_all_staff():
        print(staff.appointment_number, staff.full_name, staff.designation)
    print(container.document_service.generate_bulk_staff_pdf([]).message)


if __name__ == "__main__":
    main()
