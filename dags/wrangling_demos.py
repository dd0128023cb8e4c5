"""
Wrangling Demonstrations Report - Airflow DAG
"""

from datetime import timedelta
from airflow import DAG  # type: ignore
from airflow.models.baseoperator import cross_downstream  # type: ignore
from airflow.operators.python import PythonOperator  # type: ignore
from airflow.utils.dates import days_ago  # type: ignore
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrangling.extract  import fetch_and_save, load_dataset
from wrangling.validate import validate_dataset
from wrangling.report   import build_report
from config.CONFIG_wrangling_demos import DATASETS, PROFILE_DIR, RAW_DATA_DIR, REPORT_FILE, USE_REMOTE


def check_dataset(name: str) -> dict:
    # reads the raw file the download task saved
    df = load_dataset(name, use_remote=USE_REMOTE, raw_dir=RAW_DATA_DIR)
    return validate_dataset(name, df)


default_args = {
    "owner": "data-wrangling",
    "depends_on_past": False,
    "retries": 1,
    "retry_delay": timedelta(minutes=5),
}

dag = DAG(
    "wrangling_demos",
    default_args=default_args,
    description="Reshaping, joining, factor and string demonstrations",
    schedule_interval=None,
    start_date=days_ago(1),
    tags=["wrangling", "report"],
    catchup=False,
)


# Block 1: Fetch remote sources

download_tasks = []
if USE_REMOTE:
    for name, source in DATASETS.items():
        if not source.get("url"):
            continue
        download_tasks.append(PythonOperator(
            task_id=f"download_{name}",
            python_callable=fetch_and_save,
            op_kwargs={"name": name, "url": source["url"], "fmt": source["format"], "output_dir": RAW_DATA_DIR},
            dag=dag,
        ))


# Block 2: Tidy checks

check_tasks = []
for name in DATASETS:
    check_tasks.append(PythonOperator(
        task_id=f"check__{name}",
        python_callable=check_dataset,
        op_kwargs={"name": name},
        dag=dag,
    ))


# Block 3: Render

report_task = PythonOperator(
    task_id="build_report",
    python_callable=build_report,
    op_kwargs={"output_file": REPORT_FILE, "use_remote": USE_REMOTE, "raw_dir": RAW_DATA_DIR,
               "profile_dir": PROFILE_DIR},
    dag=dag,
)


# Dependencies

cross_downstream(download_tasks, check_tasks)
check_tasks >> report_task
